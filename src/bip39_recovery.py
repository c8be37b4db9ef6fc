# File: src/bip39_recovery.py

import itertools
import logging
from typing import List, Optional, Sequence, Union

import codec_config
from bit_accounting import BITS_PER_WORD, BitLayout, Mode, layout_for_word_count
from bit_codec import stream_checksum_ok
from codec_errors import CodecError
from phrase_utils import split_phrase, words_to_phrase
from wordlists import Dictionary, get_dictionary

log = logging.getLogger(__name__)

# Progress is logged every this many checked candidates
PROGRESS_EVERY = 100_000


def _setup(language: Optional[str], mode) -> tuple:
    dictionary: Dictionary = get_dictionary(language or codec_config.default_language())
    mode = Mode.coerce(mode if mode is not None else codec_config.default_mode())
    return dictionary, mode


def _shift(layout: BitLayout, position: int) -> int:
    # the first word holds the top 11 bits of the packed stream
    return BITS_PER_WORD * (layout.word_count - 1 - position)


def _pack(indices: List[int], layout: BitLayout) -> int:
    stream = 0
    for position, idx in enumerate(indices):
        stream |= idx << _shift(layout, position)
    return stream


def _render(stream: int, layout: BitLayout, dictionary: Dictionary) -> str:
    indices = [
        (stream >> _shift(layout, i)) & (len(dictionary) - 1)
        for i in range(layout.word_count)
    ]
    return words_to_phrase(dictionary.words_of(indices), dictionary.separator)


def recover_missing_words(
    words: Union[str, Sequence[str]],
    language: Optional[str] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> List[str]:
    """
    Fill every unknown position (the configured marker, "_" by default, or any
    word not in the wordlist) by brute-forcing all 2,048 words, and return every
    completed phrase whose checksum verifies.

    Returns [] if nothing is missing, if more positions are missing than
    codec_config.max_missing_words() allows, or if the word count has no layout.
    With c checksum bits roughly 2048^k / 2^c candidates survive, so a short
    checksum yields many phrases.
    """
    dictionary, mode = _setup(language, mode)
    parts = split_phrase(words)
    marker = codec_config.missing_word_marker()

    try:
        layout = layout_for_word_count(len(parts), mode, checksum_bits)
    except CodecError as exc:
        log.info("cannot recover: %s", exc)
        return []

    # Identify positions where the word is the marker or not in the wordlist
    missing = [i for i, w in enumerate(parts) if w == marker or w not in dictionary]
    k = len(missing)
    if k == 0 or k > codec_config.max_missing_words():
        log.info("refusing recovery with %d missing word(s)", k)
        return []

    known = [0 if i in missing else dictionary.index_of(w) for i, w in enumerate(parts)]
    base = _pack(known, layout)
    shifts = [_shift(layout, pos) for pos in missing]
    total = len(dictionary) ** k
    log.info("brute-forcing %d missing slot(s): %d candidates", k, total)

    recovered = []
    for checked, combo in enumerate(itertools.product(range(len(dictionary)), repeat=k), start=1):
        stream = base
        for shift, idx in zip(shifts, combo):
            stream |= idx << shift
        if stream_checksum_ok(stream, layout):
            recovered.append(_render(stream, layout, dictionary))
        if checked % PROGRESS_EVERY == 0:
            log.info("checked %d / %d candidates", checked, total)

    log.info("recovered %d candidate phrase(s)", len(recovered))
    return recovered


def recover_single_wrong_word(
    words: Union[str, Sequence[str]],
    language: Optional[str] = None,
    mode: Union[Mode, str, None] = None,
    checksum_bits: Optional[int] = None,
) -> List[str]:
    """
    Every word is in the wordlist but the checksum fails: try every substitution
    at every position (len(words) * 2,047 attempts) and return all phrases whose
    checksum passes. Returns [] when a word is unknown, the word count has no
    layout, or the phrase already verifies.
    """
    dictionary, mode = _setup(language, mode)
    parts = split_phrase(words)

    try:
        layout = layout_for_word_count(len(parts), mode, checksum_bits)
        indices = dictionary.indices_of(parts)
    except CodecError as exc:
        log.info("cannot recover: %s", exc)
        return []

    full = _pack(indices, layout)
    if stream_checksum_ok(full, layout):
        return []

    recovered = []
    for i, original in enumerate(indices):
        shift = _shift(layout, i)
        base = full & ~(original << shift)
        for candidate in range(len(dictionary)):
            if candidate == original:
                continue
            stream = base | (candidate << shift)
            if stream_checksum_ok(stream, layout):
                recovered.append(_render(stream, layout, dictionary))
        log.debug("position %d/%d done", i + 1, len(indices))

    log.info("recovered %d candidate phrase(s)", len(recovered))
    return recovered
