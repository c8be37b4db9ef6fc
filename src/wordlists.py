# File: src/wordlists.py

import logging
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from mnemonic import Mnemonic

from codec_errors import InvalidIndex, UnknownLanguage, UnknownWord

log = logging.getLogger(__name__)

WORDLIST_SIZE = 2048


class Dictionary:
    """
    Immutable bijection between the indices 0..2047 and the 2,048 words of one
    BIP-39 wordlist. Words are matched exactly as stored; callers are expected
    to pass input in the same Unicode form as the wordlist.
    """

    __slots__ = ("language", "separator", "_words", "_index")

    def __init__(self, language: str, words: Sequence[str], separator: str = " "):
        words = tuple(words)
        if len(words) != WORDLIST_SIZE:
            raise ValueError(
                f"{language} wordlist has {len(words)} words, expected {WORDLIST_SIZE}"
            )
        index = {word: i for i, word in enumerate(words)}
        if len(index) != WORDLIST_SIZE:
            raise ValueError(f"{language} wordlist contains duplicate words")

        object.__setattr__(self, "language", language)
        object.__setattr__(self, "separator", separator)
        object.__setattr__(self, "_words", words)
        object.__setattr__(self, "_index", index)

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __len__(self) -> int:
        return WORDLIST_SIZE

    def __contains__(self, word: str) -> bool:
        return word in self._index

    def __repr__(self) -> str:
        return f"Dictionary({self.language!r}, {self._words[0]!r}..{self._words[-1]!r})"

    @property
    def words(self) -> Tuple[str, ...]:
        return self._words

    def word_of(self, index: int) -> str:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < WORDLIST_SIZE:
            raise InvalidIndex(index)
        return self._words[index]

    def index_of(self, word: str) -> Optional[int]:
        """Index of `word`, or None when it is not in this wordlist."""
        return self._index.get(word)

    def indices_of(self, words: Sequence[str]) -> List[int]:
        """Look up every word, raising UnknownWord with the first bad position."""
        indices = []
        for position, word in enumerate(words):
            index = self._index.get(word)
            if index is None:
                raise UnknownWord(word, self.language, position)
            indices.append(index)
        return indices

    def words_of(self, indices: Sequence[int]) -> List[str]:
        words = []
        for position, index in enumerate(indices):
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < WORDLIST_SIZE:
                raise InvalidIndex(index, position)
            words.append(self._words[index])
        return words


@lru_cache(maxsize=1)
def _bundled() -> Tuple[str, ...]:
    return tuple(sorted(Mnemonic.list_languages()))


def available_languages() -> List[str]:
    """Every wordlist bundled with the `mnemonic` package, sorted by name."""
    return list(_bundled())


@lru_cache(maxsize=None)
def _load(language: str) -> Dictionary:
    mnemo = Mnemonic(language)
    separator = getattr(mnemo, "delimiter", " ")
    dictionary = Dictionary(language, mnemo.wordlist, separator)
    log.debug("built %s dictionary (%d words)", language, len(dictionary))
    return dictionary


def get_dictionary(language: str) -> Dictionary:
    """
    Return the process-wide Dictionary for `language`, building it on first use.
    Raises UnknownLanguage for a name the `mnemonic` package does not ship.
    """
    key = str(language).strip().lower().replace("-", "_")
    languages = available_languages()
    if key not in languages:
        raise UnknownLanguage(str(language), languages)
    return _load(key)


def word_of(language: str, index: int) -> str:
    return get_dictionary(language).word_of(index)


def index_of(language: str, word: str) -> Optional[int]:
    return get_dictionary(language).index_of(word)


def language_tables() -> Dict[str, Dictionary]:
    """Build (or fetch) every bundled dictionary."""
    return {name: get_dictionary(name) for name in available_languages()}
