# File: src/bip39_codec.py

"""
Public encode / decode surface.

    encode(entropy, word_count, language, mode)  -> EncodeResult
    decode(words, language, mode)                -> DecodeResult

Encode
------
  entropy bytes
    -> bit layout for word_count                 (bit_accounting)
    -> entropy || sha256 prefix -> 11-bit groups (bit_codec.pack_indices)
    -> indices -> words                          (wordlists)

Decode
------
  phrase or word list
    -> words -> indices                          (wordlists)
    -> 11-bit groups -> entropy + checksum       (bit_codec.split_indices)
    -> checksum verify                           (bit_codec.checksum_of)

Data errors never escape `encode` / `decode`; they come back as result values
with a FailureCode. The index-level helpers raise instead.
"""

import logging
from typing import List, Optional, Sequence, Union

import codec_config
from bit_accounting import Mode, layout_for_word_count, word_count_for_entropy
from bit_codec import checksum_of, pack_indices, split_indices, unpack_indices
from codec_errors import (
    ChecksumMismatch,
    CodecError,
    DecodeResult,
    EncodeResult,
    FailureCode,
    InvalidEntropy,
)
from phrase_utils import split_phrase, words_to_phrase
from wordlists import get_dictionary

log = logging.getLogger(__name__)

Words = Union[str, Sequence[str]]


def _resolve(language: Optional[str], mode) -> tuple:
    language = language or codec_config.default_language()
    mode = Mode.coerce(mode if mode is not None else codec_config.default_mode())
    return language, mode


# ── index level ───────────────────────────────────────────────────────────────

def to_indices(
    entropy: bytes,
    word_count: Optional[int] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> List[int]:
    """
    Pack `entropy` into 11-bit indices. Without `word_count`, the smallest word
    count whose layout carries len(entropy) bytes is used.
    Raises CodecError subclasses.
    """
    _, mode = _resolve(None, mode)
    if word_count is None:
        if not isinstance(entropy, (bytes, bytearray, memoryview)):
            raise InvalidEntropy(f"entropy must be bytes, got {type(entropy).__name__}")
        if not entropy:
            raise InvalidEntropy("entropy must contain at least one byte")
        if checksum_bits is not None:
            # n * 11 == len * 8 + checksum_bits must hold exactly
            total = len(entropy) * 8 + checksum_bits
            word_count = total // 11 if total % 11 == 0 else -1
        else:
            word_count = word_count_for_entropy(len(entropy), mode)
    return pack_indices(entropy, word_count, mode, checksum_bits)


def from_indices(
    indices: Sequence[int],
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> bytes:
    """Unpack 11-bit indices into entropy, verifying the checksum. Raises CodecError subclasses."""
    _, mode = _resolve(None, mode)
    return unpack_indices(indices, mode, checksum_bits)


# ── word level ────────────────────────────────────────────────────────────────

def encode(
    entropy: bytes,
    word_count: Optional[int] = None,
    language: Optional[str] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> EncodeResult:
    """
    Encode `entropy` as a mnemonic of `word_count` words in `language`.

    Args:
        entropy:       Payload bytes.
        word_count:    Number of words; inferred from len(entropy) if None.
        language:      Wordlist name (default from codec_config).
        mode:          "standard" (six BIP-39 word counts) or "relaxed".
        checksum_bits: Explicit checksum length, relaxed mode only.

    Returns:
        EncodeResult; on failure ``success=False`` and ``failure`` says why.
    """
    try:
        language, mode = _resolve(language, mode)
        dictionary = get_dictionary(language)
        indices = to_indices(entropy, word_count, mode, checksum_bits)
        words = dictionary.words_of(indices)
    except CodecError as exc:
        log.debug("encode failed: %s", exc)
        return EncodeResult(success=False, failure=exc.code, detail=exc.message, error=exc)

    layout = layout_for_word_count(len(words), mode, checksum_bits)
    return EncodeResult(
        success=True,
        words=words,
        phrase=words_to_phrase(words, dictionary.separator),
        failure=FailureCode.OK,
        word_count=layout.word_count,
        entropy_bytes=layout.entropy_bytes,
        checksum_bits=layout.checksum_bits,
    )


def decode(
    words: Words,
    language: Optional[str] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> DecodeResult:
    """
    Decode a mnemonic (phrase string or list of words) back to its entropy.

    On a checksum mismatch the result carries the decoded bytes with
    ``success=False`` and ``checksum_valid=False``; the caller decides whether an
    unverified payload is acceptable.
    """
    word_list = split_phrase(words)
    try:
        language, mode = _resolve(language, mode)
        dictionary = get_dictionary(language)
        indices = dictionary.indices_of(word_list)
        layout, entropy, embedded = split_indices(indices, mode, checksum_bits)
    except CodecError as exc:
        log.debug("decode failed: %s", exc)
        return DecodeResult(
            success=False,
            failure=exc.code,
            detail=exc.message,
            word_count=len(word_list),
            error=exc,
        )

    diagnostics = dict(
        word_count=layout.word_count,
        entropy_bytes=layout.entropy_bytes,
        checksum_bits=layout.checksum_bits,
    )
    if embedded != checksum_of(entropy, layout.checksum_bits):
        exc = ChecksumMismatch(entropy, layout.checksum_bits)
        log.warning(
            "checksum mismatch decoding %d %s words (%d checksum bits)",
            layout.word_count, language, layout.checksum_bits,
        )
        return DecodeResult(
            success=False,
            entropy=entropy,
            failure=exc.code,
            detail=exc.message,
            checksum_valid=False,
            error=exc,
            **diagnostics,
        )

    return DecodeResult(
        success=True,
        entropy=entropy,
        failure=FailureCode.OK,
        checksum_valid=True,
        **diagnostics,
    )


def is_valid_mnemonic(
    words: Words,
    language: Optional[str] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> bool:
    """
    Returns True if every word is in the wordlist, the word count has a layout
    in `mode`, and the checksum verifies.
    """
    return decode(words, language, mode, checksum_bits).trusted


def translate(
    words: Words,
    source_language: str,
    target_language: str,
) -> List[str]:
    """
    Re-render a mnemonic in another language. The indices, and therefore the
    entropy and checksum, are unchanged. Raises UnknownWord / UnknownLanguage.
    """
    source = get_dictionary(source_language)
    target = get_dictionary(target_language)
    return target.words_of(source.indices_of(split_phrase(words)))
