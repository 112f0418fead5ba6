"""
Line segmentation for cipher output.

A message is walked one symbol at a time.  Symbols in the active charset
are transformed (a replacement lookup or a tabular mapper call); anything
else is copied to both lines unchanged and marks a safe place to break.
Lines are cut at the last break point once they reach `max_width`, so words
are only split when a single word is wider than a line.
"""
import logging
import re
from collections import namedtuple
from itertools import cycle

from cipher_engine.charset import as_charset, CharacterSet
from cipher_engine.frequency_analyser import tally
from cipher_engine.languages import ACA_CHARSETS, ENCODING_CHARSETS, LATIN, get_replacements
from cipher_engine.tabular import CipherType, INVALID, mapper_factory

logger = logging.getLogger(__name__)

LineSegment = namedtuple("LineSegment", ["cipher", "plain"])

ENCODE = "encode"
DECODE = "decode"

_WHITESPACE = re.compile(r"[\r\n ]+")


def clean_string(text):
    """Collapse line breaks and runs of spaces into a single space."""
    return _WHITESPACE.sub(" ", text)


def minimize_string(text, charset=None):
    """Only the charset symbols of `text`, upper-cased."""
    charset = as_charset(charset)
    return "".join(sym for sym in charset.tokenize(text) if sym in charset)


def chunk(text, size, charset=None):
    """
    Regroup `text` into blocks of `size` symbols separated by one space,
    dropping everything that is not in the charset.
    """
    charset = as_charset(charset)
    symbols = [sym for sym in charset.tokenize(text) if sym in charset]
    return " ".join(
        "".join(symbols[i:i + size]) for i in range(0, len(symbols), size)
    )


def _fold(symbols, fold):
    for sym in symbols:
        replacement = fold.get(sym)
        if replacement is None:
            yield sym
        else:
            yield from replacement


def segment(text, transform, max_width, charset=None, fold=None):
    """
    Split `text` into LineSegment(cipher, plain) pairs no wider than
    `max_width`.  `transform` maps one charset symbol of the plain line to
    its cipher symbol.  `fold` optionally replaces symbols (diacritics)
    before they are classified.
    """
    if max_width < 1:
        raise ValueError("max_width must be at least 1")
    charset = as_charset(charset)
    symbols = charset.tokenize(text)
    if fold:
        symbols = charset.tokenize("".join(_fold(symbols, fold)))

    result = []
    cipher_line = []
    plain_line = []
    last_split = -1
    for sym in symbols:
        if sym in charset:
            out = transform(sym)
        else:
            out = sym
            # an apostrophe keeps a contraction on one line
            if sym != "'":
                last_split = len(plain_line) + 1
        plain_line.append(sym)
        cipher_line.append(out)

        if len(plain_line) >= max_width:
            if last_split == -1:
                result.append(LineSegment("".join(cipher_line), "".join(plain_line)))
                cipher_line, plain_line = [], []
            else:
                result.append(LineSegment("".join(cipher_line[:last_split]),
                                          "".join(plain_line[:last_split])))
                cipher_line = cipher_line[last_split:]
                plain_line = plain_line[last_split:]
            last_split = -1
    if plain_line:
        result.append(LineSegment("".join(cipher_line), "".join(plain_line)))
    return result


def key_stream(key, charset=None, neutral="A"):
    """
    Endless stream of usable key symbols.  An empty key behaves as `neutral`
    and symbols outside the charset are skipped rather than consumed.
    """
    charset = as_charset(charset)
    symbols = [sym for sym in charset.tokenize(key or "") if sym in charset]
    if not symbols:
        if key:
            logger.debug("key %r has no usable symbols, using %s", key, neutral)
        symbols = [neutral]
    return cycle(symbols)


def build_tabular(message, key, cipher_type="vigenere", operation=ENCODE,
                  max_width=53, block_size=0, charset=None, freq=None):
    """
    Encode (or decode) `message` with a tabular cipher and split it into
    LineSegment pairs.

    For ENCODE `message` is plaintext; for DECODE it is ciphertext and the
    pairs are still returned as (cipher, plain).  With 0 < block_size <
    max_width the message is first regrouped into blocks of that size.
    `freq`, when given, is refilled with the counts of the cipher side.
    """
    charset = as_charset(charset)
    mapper = mapper_factory(cipher_type)
    if 0 < block_size < max_width:
        message = chunk(message, block_size, charset)

    # Gronsfeld keys are digits, so they are drawn from their own charset
    if mapper.name == CipherType.GRONSFELD:
        keys = key_stream(key, CharacterSet("0123456789"), neutral="0")
    else:
        keys = key_stream(key, charset)

    if operation == DECODE:
        def transform(sym):
            return mapper.decode(sym, next(keys))

        segments = [LineSegment(s.plain, s.cipher)
                    for s in segment(message, transform, max_width, charset)]
    else:
        def transform(sym):
            return mapper.encode(sym, next(keys))

        segments = segment(message, transform, max_width, charset)

    if freq is not None:
        freq.clear()
        freq.update(tally("".join(s.cipher for s in segments), charset))
    return segments


def build_replacement(message, replacement, max_width=53, lang="en", freq=None, aca=False):
    """
    Encode `message` with a plain->cipher replacement and split it into
    LineSegment pairs.  Unmapped symbols come out as INVALID.  With `aca`
    the message is first reduced to the ACA charset of `lang`, so German
    umlauts fold to plain vowels and a sharp s becomes SS.

    When `freq` (a dict / Counter) is passed it is reset to zero for every
    symbol of the encoding charset and then counts each cipher symbol
    produced.
    """
    if aca:
        charset = CharacterSet(ACA_CHARSETS.get(lang, LATIN))
    else:
        charset = CharacterSet.for_language(lang)
    if freq is not None:
        freq.clear()
        for sym in ENCODING_CHARSETS.get(lang, ENCODING_CHARSETS["en"]):
            freq[sym] = 0

    def transform(sym):
        out = replacement.get(sym) or INVALID
        if freq is not None and out != INVALID:
            freq[out] = freq.get(out, 0) + 1
        return out

    return segment(message, transform, max_width, charset, fold=get_replacements(lang, aca))
