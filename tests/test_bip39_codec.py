"""Tests for the public encode / decode surface."""

import logging

import pytest

from bip39_codec import (
    decode,
    encode,
    from_indices,
    is_valid_mnemonic,
    to_indices,
    translate,
)
from codec_errors import ChecksumMismatch, FailureCode, InvalidWordCount, UnknownWord
from wordlists import available_languages, get_dictionary

# Published BIP-39 vectors (entropy hex, mnemonic)
VECTORS = [
    ("00" * 16, "abandon abandon abandon abandon abandon abandon abandon abandon abandon "
                "abandon abandon about"),
    ("7f" * 16, "legal winner thank year wave sausage worth useful legal winner thank yellow"),
    ("80" * 16, "letter advice cage absurd amount doctor acoustic avoid letter advice cage above"),
    ("ff" * 16, "zoo zoo zoo zoo zoo zoo zoo zoo zoo zoo zoo wrong"),
    ("80" * 32, "letter advice cage absurd amount doctor acoustic avoid letter advice cage "
                "absurd amount doctor acoustic avoid letter advice cage absurd amount doctor "
                "acoustic bless"),
    ("ff" * 32, " ".join(["zoo"] * 23 + ["vote"])),
]


class TestKnownVectors:
    """Tests against published vectors."""

    def test_zero_entropy(self, zero_entropy, zero_phrase):
        """The all-zero buffer encodes to abandon x11 about and back."""
        result = encode(zero_entropy, 12, "english", "standard")
        assert result.success
        assert result.phrase == zero_phrase
        assert result.checksum_bits == 4

        decoded = decode(zero_phrase, "english", "standard")
        assert decoded.success and decoded.checksum_valid
        assert decoded.entropy == zero_entropy

    @pytest.mark.parametrize("entropy_hex,phrase", VECTORS)
    def test_vectors(self, entropy_hex, phrase):
        """Each vector encodes and decodes exactly."""
        entropy = bytes.fromhex(entropy_hex)
        assert encode(entropy).phrase == phrase
        assert decode(phrase).entropy == entropy


class TestEncode:
    """Tests for encode results."""

    def test_word_count_inferred(self, zero_entropy):
        """Without a word count the layout is inferred from the payload size."""
        result = encode(zero_entropy)
        assert result.word_count == 12
        assert result.entropy_bytes == 16

    def test_standard_24_words(self):
        """24 standard words carry 32 bytes and 8 checksum bits."""
        result = encode(bytes(32), 24)
        assert result.success
        assert (result.entropy_bytes, result.checksum_bits) == (32, 8)

    @pytest.mark.parametrize("size,words", [(15, 12), (17, 12), (31, 24), (16, 24)])
    def test_wrong_length_fails(self, size, words):
        """Mismatched buffer sizes fail with invalid_word_count."""
        result = encode(bytes(size), words, mode="standard")
        assert not result.success
        assert result.failure is FailureCode.INVALID_WORD_COUNT
        assert result.words == []
        with pytest.raises(InvalidWordCount):
            result.unwrap()

    def test_relaxed_word_counts(self):
        """Relaxed mode encodes non-standard word counts."""
        result = encode(b"\x01", 1, mode="relaxed")
        assert result.success
        assert len(result.words) == 1
        assert result.checksum_bits == 3

        result = encode(bytes(11), 8, mode="relaxed")
        assert result.checksum_bits == 0

    def test_non_standard_rejected_in_standard_mode(self):
        """Standard mode refuses a relaxed-only word count."""
        result = encode(bytes(11), 8, mode="standard")
        assert result.failure is FailureCode.INVALID_WORD_COUNT

    def test_explicit_checksum(self):
        """Two bytes with a 17-bit checksum make three words."""
        result = encode(b"\xbe\xef", 3, mode="relaxed", checksum_bits=17)
        assert result.success
        assert len(result.words) == 3
        assert decode(result.words, mode="relaxed", checksum_bits=17).entropy == b"\xbe\xef"

    def test_empty_entropy(self):
        """Empty payloads fail with invalid_entropy."""
        result = encode(b"", 1, mode="relaxed")
        assert result.failure is FailureCode.INVALID_ENTROPY

    def test_unknown_language(self, zero_entropy):
        """Unknown languages come back as a failure value."""
        result = encode(zero_entropy, 12, language="klingon")
        assert result.failure is FailureCode.UNKNOWN_LANGUAGE
        assert "klingon" in result.summary()

    def test_bad_mode_raises(self, zero_entropy):
        """An unknown mode name is a programming error."""
        with pytest.raises(ValueError):
            encode(zero_entropy, 12, mode="lenient")

    def test_summary(self, zero_entropy):
        """summary() describes the layout used."""
        assert encode(zero_entropy).summary() == "[OK] 12 words  entropy=16B checksum=4b"


class TestDecode:
    """Tests for decode results."""

    def test_accepts_word_list(self, zero_words, zero_entropy):
        """A list of words decodes like a phrase."""
        assert decode(zero_words).entropy == zero_entropy

    def test_extra_whitespace(self, zero_words, zero_entropy):
        """Runs of whitespace between words are ignored."""
        assert decode("  " + "\t ".join(zero_words) + "\n").entropy == zero_entropy

    def test_checksum_mismatch(self, zero_words, zero_entropy, caplog):
        """A bad checksum returns the untrusted entropy and logs a warning."""
        words = zero_words[:-1] + ["abandon"]
        with caplog.at_level(logging.WARNING):
            result = decode(words)
        assert not result.success
        assert not result.checksum_valid
        assert not result.trusted
        assert result.failure is FailureCode.CHECKSUM_MISMATCH
        assert result.entropy == zero_entropy
        assert "checksum mismatch" in caplog.text
        with pytest.raises(ChecksumMismatch):
            result.unwrap()

    def test_every_checksum_bit_flip(self):
        """Flipping any checksum bit of a 24-word phrase is reported."""
        entropy = bytes(range(32))
        indices = to_indices(entropy, 24)
        for bit in range(8):
            mutated = list(indices)
            mutated[-1] ^= 1 << bit
            words = get_dictionary("english").words_of(mutated)
            result = decode(words)
            assert result.failure is FailureCode.CHECKSUM_MISMATCH
            assert result.entropy == entropy

    def test_unknown_word(self, zero_words):
        """Unknown words are reported with their position."""
        words = list(zero_words)
        words[4] = "notaword"
        result = decode(words)
        assert result.failure is FailureCode.UNKNOWN_WORD
        assert result.entropy is None
        assert isinstance(result.error, UnknownWord)
        assert result.error.position == 4

    def test_blank_entry_keeps_position(self, zero_words):
        """A blank entry in a word list is an unknown word at its own position."""
        words = list(zero_words)
        words[6] = " "
        result = decode(words)
        assert result.failure is FailureCode.UNKNOWN_WORD
        assert result.error.position == 6
        assert result.word_count == 12

    def test_invalid_word_count(self, zero_words):
        """Eleven words have no standard layout."""
        result = decode(zero_words[:11])
        assert result.failure is FailureCode.INVALID_WORD_COUNT
        assert result.word_count == 11

    def test_relaxed_decodes_standard(self, zero_phrase, zero_entropy):
        """Standard mnemonics decode identically in relaxed mode."""
        assert decode(zero_phrase, mode="relaxed").entropy == zero_entropy

    def test_is_valid_mnemonic(self, zero_phrase):
        """is_valid_mnemonic only accepts verified phrases."""
        assert is_valid_mnemonic(zero_phrase)
        assert not is_valid_mnemonic(zero_phrase.replace("about", "abandon"))
        assert not is_valid_mnemonic("abandon about")


class TestIndicesAndTranslation:
    """Tests for the index-level helpers and translation."""

    def test_indices_round_trip(self):
        """to_indices / from_indices invert each other."""
        entropy = bytes(range(1, 21))
        indices = to_indices(entropy)
        assert len(indices) == 15
        assert from_indices(indices) == entropy

    def test_explicit_checksum_needs_balance(self):
        """An explicit checksum that does not balance any word count is rejected."""
        with pytest.raises(InvalidWordCount):
            to_indices(b"\x00\x01", mode="relaxed", checksum_bits=16)
        assert len(to_indices(b"\x00\x01", mode="relaxed", checksum_bits=17)) == 3

    @pytest.mark.parametrize("language", [l for l in available_languages() if l != "english"])
    def test_translate_round_trip(self, language, zero_phrase, zero_entropy):
        """Translation keeps indices, so the phrase decodes in the new language."""
        translated = translate(zero_phrase, "english", language)
        assert decode(translated, language).entropy == zero_entropy
        assert translate(translated, language, "english") == zero_phrase.split()

    def test_encode_in_every_language(self, zero_entropy):
        """Each bundled language encodes and decodes the same payload."""
        for language in available_languages():
            result = encode(zero_entropy, 12, language)
            assert result.success
            assert decode(result.phrase, language).entropy == zero_entropy
