# File: src/phrase_utils.py

from typing import List, Sequence, Union


def split_phrase(raw: Union[str, Sequence[str]]) -> List[str]:
    """
    Turn a transcribed mnemonic into a list of words. A string is split on any
    whitespace (including the ideographic space used by Japanese phrases); a
    sequence of words is copied entry for entry with surrounding whitespace
    stripped, so positions still match the caller's list.
    """
    if isinstance(raw, str):
        return raw.split()
    return [w.strip() for w in raw]


def words_to_phrase(words: Sequence[str], separator: str = " ") -> str:
    """
    Join a list of words into a single mnemonic phrase using the wordlist's separator.
    """
    return separator.join(words)
