# File: src/bit_codec.py

"""
11-bit packing of entropy plus SHA-256 checksum bits.

The entropy bytes and the leading checksum bits of SHA-256(entropy) are read as
one big-endian bit string, MSB first, and cut into 11-bit groups:

    entropy (8 * B bits) || sha256(entropy)[:C bits]  ->  n groups of 11 bits

Python integers are used as the bit buffer, so no per-byte shifting state is
needed in either direction.
"""

import hashlib
import logging
from typing import List, Optional, Sequence, Union

from bit_accounting import BITS_PER_WORD, BitLayout, Mode, layout_for_word_count
from codec_errors import ChecksumMismatch, InvalidEntropy, InvalidIndex, InvalidWordCount

log = logging.getLogger(__name__)

MAX_INDEX = (1 << BITS_PER_WORD) - 1   # 2047
DIGEST_BITS = 256


def hash256(data: bytes) -> bytes:
    """SHA-256 digest of *data* (32 bytes)."""
    return hashlib.sha256(data).digest()


def checksum_of(entropy: bytes, checksum_bits: int) -> int:
    """Leading `checksum_bits` bits of SHA-256(entropy), as an unsigned integer."""
    if checksum_bits == 0:
        return 0
    digest = int.from_bytes(hash256(entropy), "big")
    return digest >> (DIGEST_BITS - checksum_bits)


def _as_bytes(entropy) -> bytes:
    if not isinstance(entropy, (bytes, bytearray, memoryview)):
        raise InvalidEntropy(f"entropy must be bytes, got {type(entropy).__name__}")
    entropy = bytes(entropy)
    if not entropy:
        raise InvalidEntropy("entropy must contain at least one byte")
    return entropy


def pack_indices(
    entropy: bytes,
    word_count: int,
    mode: Union[Mode, str] = Mode.STANDARD,
    checksum_bits: Optional[int] = None,
) -> List[int]:
    """
    Encode `entropy` into `word_count` 11-bit indices (0..2047).

    The checksum length comes from the shared layout for `word_count`; the
    layout's entropy size must equal len(entropy), otherwise InvalidWordCount.
    """
    entropy = _as_bytes(entropy)
    layout = layout_for_word_count(word_count, mode, checksum_bits)
    if layout.entropy_bytes != len(entropy):
        raise InvalidWordCount(
            f"{word_count} words carry {layout.entropy_bytes} entropy bytes "
            f"(+{layout.checksum_bits} checksum bits), got {len(entropy)} bytes",
            word_count,
        )

    cs = layout.checksum_bits
    stream = (int.from_bytes(entropy, "big") << cs) | checksum_of(entropy, cs)

    # MSB-first groups: the first word holds the top 11 bits of the stream
    return [
        (stream >> (BITS_PER_WORD * (word_count - 1 - i))) & MAX_INDEX
        for i in range(word_count)
    ]


def _join_indices(indices: Sequence[int]) -> int:
    stream = 0
    for position, value in enumerate(indices):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= MAX_INDEX:
            raise InvalidIndex(value, position)
        stream = (stream << BITS_PER_WORD) | value
    return stream


def split_indices(
    indices: Sequence[int],
    mode: Union[Mode, str] = Mode.STANDARD,
    checksum_bits: Optional[int] = None,
):
    """
    Split `indices` into (layout, entropy, embedded_checksum) without verifying.

    Raises InvalidIndex for a value outside 0..2047 and InvalidWordCount when
    the number of indices has no layout in `mode`.
    """
    indices = list(indices)
    layout: BitLayout = layout_for_word_count(len(indices), mode, checksum_bits)
    entropy, embedded = split_stream(_join_indices(indices), layout)
    return layout, entropy, embedded


def split_stream(stream: int, layout: BitLayout):
    """Split a packed `layout.total_bits`-bit integer into (entropy, embedded_checksum)."""
    cs = layout.checksum_bits
    entropy = (stream >> cs).to_bytes(layout.entropy_bytes, "big")
    return entropy, stream & ((1 << cs) - 1)


def stream_checksum_ok(stream: int, layout: BitLayout) -> bool:
    entropy, embedded = split_stream(stream, layout)
    return embedded == checksum_of(entropy, layout.checksum_bits)


def unpack_indices(
    indices: Sequence[int],
    mode: Union[Mode, str] = Mode.STANDARD,
    checksum_bits: Optional[int] = None,
) -> bytes:
    """
    Decode 11-bit `indices` back into the entropy bytes and verify the checksum.

    Raises ChecksumMismatch (carrying the untrusted entropy) when the trailing
    bits differ from the SHA-256 prefix of the decoded entropy.
    """
    layout, entropy, embedded = split_indices(indices, mode, checksum_bits)
    if embedded != checksum_of(entropy, layout.checksum_bits):
        raise ChecksumMismatch(entropy, layout.checksum_bits)
    return entropy
