# File: src/codec_errors.py

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class FailureCode(str, Enum):
    """Reason an encode or decode attempt did not produce a trusted result."""

    OK                 = "ok"
    INVALID_WORD_COUNT = "invalid_word_count"  # no bit layout for this word count
    INVALID_INDEX      = "invalid_index"       # packed value outside 0..2047
    UNKNOWN_WORD       = "unknown_word"        # word not in the selected wordlist
    CHECKSUM_MISMATCH  = "checksum_mismatch"   # trailing bits != SHA-256 prefix
    INVALID_ENTROPY    = "invalid_entropy"     # empty or non-bytes payload
    UNKNOWN_LANGUAGE   = "unknown_language"    # no bundled wordlist by that name


class CodecError(ValueError):
    """Base class for every data error raised by the codec layers."""

    code = FailureCode.OK

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidWordCount(CodecError):
    code = FailureCode.INVALID_WORD_COUNT

    def __init__(self, message: str, word_count: Optional[int] = None):
        super().__init__(message)
        self.word_count = word_count


class InvalidIndex(CodecError):
    code = FailureCode.INVALID_INDEX

    def __init__(self, value, position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"index {value!r}{where} is outside 0..2047")
        self.value = value
        self.position = position


class UnknownWord(CodecError):
    code = FailureCode.UNKNOWN_WORD

    def __init__(self, word: str, language: str, position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"word {word!r}{where} not found in the {language} wordlist")
        self.word = word
        self.language = language
        self.position = position


class ChecksumMismatch(CodecError):
    """
    The trailing checksum bits do not match the digest of the decoded entropy.
    `entropy` holds the decoded bytes, which must be treated as untrusted.
    """

    code = FailureCode.CHECKSUM_MISMATCH

    def __init__(self, entropy: bytes, checksum_bits: int):
        super().__init__(f"checksum mismatch ({checksum_bits} checksum bits)")
        self.entropy = entropy
        self.checksum_bits = checksum_bits


class InvalidEntropy(CodecError):
    code = FailureCode.INVALID_ENTROPY


class UnknownLanguage(CodecError):
    code = FailureCode.UNKNOWN_LANGUAGE

    def __init__(self, language: str, available: List[str]):
        super().__init__(f"unknown language {language!r}: choose from {available}")
        self.language = language
        self.available = available


@dataclass
class EncodeResult:
    """Outcome of :func:`bip39_codec.encode`.

    On success  : ``success=True``,  ``words``/``phrase`` hold the mnemonic.
    On failure  : ``success=False``, ``failure`` explains why, ``words`` is empty.
    """

    success:       bool
    words:         List[str]             = field(default_factory=list)
    phrase:        str                   = ""
    failure:       Optional[FailureCode] = None
    detail:        str                   = ""

    # Bit accounting used (0 when the layout could not be resolved)
    word_count:    int                   = 0
    entropy_bytes: int                   = 0
    checksum_bits: int                   = 0

    error:         Optional[CodecError]  = field(default=None, repr=False, compare=False)

    def unwrap(self) -> List[str]:
        """Return the words, or raise the error that prevented encoding."""
        if self.success:
            return self.words
        raise self.error if self.error is not None else CodecError(self.detail)

    def summary(self) -> str:
        if self.success:
            return (
                f"[OK] {self.word_count} words  "
                f"entropy={self.entropy_bytes}B checksum={self.checksum_bits}b"
            )
        return f"[FAIL:{self.failure.value}] {self.detail}"


@dataclass
class DecodeResult:
    """Outcome of :func:`bip39_codec.decode`.

    On success           : ``success=True``, ``entropy`` is the payload.
    On checksum mismatch : ``success=False``, ``checksum_valid=False`` and
                           ``entropy`` still holds the decoded (untrusted) bytes.
    On any other failure : ``success=False``, ``entropy`` is None.
    """

    success:        bool
    entropy:        Optional[bytes]       = None
    failure:        Optional[FailureCode] = None
    detail:         str                   = ""
    checksum_valid: bool                  = False

    word_count:     int                   = 0
    entropy_bytes:  int                   = 0
    checksum_bits:  int                   = 0

    error:          Optional[CodecError]  = field(default=None, repr=False, compare=False)

    @property
    def trusted(self) -> bool:
        return self.success and self.checksum_valid

    def unwrap(self) -> bytes:
        """Return the entropy, or raise the error that prevented decoding."""
        if self.success:
            return self.entropy
        raise self.error if self.error is not None else CodecError(self.detail)

    def summary(self) -> str:
        if self.success:
            return (
                f"[OK] {self.entropy_bytes}B from {self.word_count} words  "
                f"checksum={self.checksum_bits}b"
            )
        return f"[FAIL:{self.failure.value}] {self.detail}"
