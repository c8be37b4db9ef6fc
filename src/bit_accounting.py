# File: src/bit_accounting.py

"""
Bit accounting shared by the encoder and the decoder.

Every mnemonic satisfies

    word_count * 11 == entropy_bytes * 8 + checksum_bits

with 0 <= checksum_bits <= 256 (the SHA-256 digest length). Both directions
resolve their layout through `layout_for_word_count`, so a phrase produced by
`pack_indices` always splits the same way in `unpack_indices`.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from codec_errors import InvalidWordCount

log = logging.getLogger(__name__)

BITS_PER_WORD = 11
MAX_CHECKSUM_BITS = 256

# word count -> (entropy bytes, checksum bits); checksum is word_count / 3 bits
STANDARD_LAYOUTS: Dict[int, Tuple[int, int]] = {
    9:  (12, 3),
    12: (16, 4),
    15: (20, 5),
    18: (24, 6),
    21: (28, 7),
    24: (32, 8),
}


class Mode(str, Enum):
    STANDARD = "standard"
    RELAXED = "relaxed"

    @classmethod
    def coerce(cls, value: Union["Mode", str]) -> "Mode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unknown mode '{value}': choose from {[m.value for m in cls]}"
            ) from None


@dataclass(frozen=True)
class BitLayout:
    """How the bits of an n-word mnemonic split between entropy and checksum."""

    word_count: int
    entropy_bytes: int
    checksum_bits: int

    @property
    def total_bits(self) -> int:
        return self.word_count * BITS_PER_WORD

    @property
    def entropy_bits(self) -> int:
        return self.entropy_bytes * 8


def standard_word_counts() -> List[int]:
    return sorted(STANDARD_LAYOUTS)


def _explicit_layout(word_count: int, checksum_bits: int) -> BitLayout:
    total_bits = word_count * BITS_PER_WORD
    if not 0 <= checksum_bits <= MAX_CHECKSUM_BITS:
        raise InvalidWordCount(
            f"checksum of {checksum_bits} bits is outside 0..{MAX_CHECKSUM_BITS}",
            word_count,
        )
    entropy_bits = total_bits - checksum_bits
    if entropy_bits < 8 or entropy_bits % 8:
        raise InvalidWordCount(
            f"{word_count} words ({total_bits} bits) minus {checksum_bits} checksum bits "
            f"does not leave a whole number of entropy bytes",
            word_count,
        )
    return BitLayout(word_count, entropy_bits // 8, checksum_bits)


def layout_for_word_count(
    word_count: int,
    mode: Union[Mode, str] = Mode.STANDARD,
    checksum_bits: Optional[int] = None,
) -> BitLayout:
    """
    Resolve the (entropy_bytes, checksum_bits) split for `word_count` words.

    Standard mode only accepts the six table word counts. Relaxed mode keeps the
    table layout for those counts and otherwise packs as many whole entropy bytes
    as fit, leaving the remaining `(word_count * 11) % 8` bits as checksum.
    An explicit `checksum_bits` overrides the relaxed computation; in standard
    mode it must agree with the table.

    Raises InvalidWordCount when no layout exists.
    """
    mode = Mode.coerce(mode)
    if isinstance(word_count, bool) or not isinstance(word_count, int) or word_count < 1:
        raise InvalidWordCount(f"word count must be a positive integer, got {word_count!r}", None)

    standard = STANDARD_LAYOUTS.get(word_count)

    if mode is Mode.STANDARD:
        if standard is None:
            raise InvalidWordCount(
                f"{word_count} words is not a standard word count {standard_word_counts()}",
                word_count,
            )
        if checksum_bits is not None and checksum_bits != standard[1]:
            raise InvalidWordCount(
                f"{word_count} standard words carry {standard[1]} checksum bits, "
                f"not {checksum_bits}",
                word_count,
            )
        layout = BitLayout(word_count, *standard)
    elif checksum_bits is not None:
        layout = _explicit_layout(word_count, checksum_bits)
    elif standard is not None:
        layout = BitLayout(word_count, *standard)
    else:
        total_bits = word_count * BITS_PER_WORD
        entropy_bytes = total_bits // 8
        layout = BitLayout(word_count, entropy_bytes, total_bits - entropy_bytes * 8)

    log.debug(
        "%s layout for %d words: %d entropy bytes + %d checksum bits",
        mode.value, word_count, layout.entropy_bytes, layout.checksum_bits,
    )
    return layout


def word_count_for_entropy(
    entropy_bytes: int,
    mode: Union[Mode, str] = Mode.STANDARD,
) -> int:
    """
    Smallest word count whose layout carries exactly `entropy_bytes` bytes.

    Raises InvalidWordCount when no such word count exists in the given mode.
    """
    mode = Mode.coerce(mode)
    for word_count, (size, _) in sorted(STANDARD_LAYOUTS.items()):
        if size == entropy_bytes:
            return word_count
    if mode is Mode.RELAXED and entropy_bytes >= 1:
        # each word adds 1.375 bytes, so some sizes (3, 7, ...) are skipped and
        # need an explicit checksum length instead
        word_count = -(-entropy_bytes * 8 // BITS_PER_WORD)
        while True:
            size = layout_for_word_count(word_count, mode).entropy_bytes
            if size == entropy_bytes:
                return word_count
            if size > entropy_bytes:
                break
            word_count += 1
    raise InvalidWordCount(
        f"no {mode.value} word count carries {entropy_bytes} entropy bytes", None
    )
