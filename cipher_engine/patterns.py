import logging
from collections import defaultdict, namedtuple

from cipher_engine.charset import CharacterSet, upper
from cipher_engine.languages import get_replacements

logger = logging.getLogger(__name__)

DIGITS36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# word, line number in the source list, count column of that line, tier
DictionaryEntry = namedtuple("DictionaryEntry", ["word", "rank", "frequency", "tier"])


def make_pattern(word, width=1):
    """
    Canonical shape of `word`: each group of `width` characters gets the
    next base-36 digit the first time it is seen.

        make_pattern("XYZZY")           -> "01221"
        make_pattern("..--X..X..X", 2)  -> "012304"

    The input is padded with X so a short last group is still a full group.
    """
    if width < 1:
        raise ValueError("width must be at least 1")
    seen = {}
    res = []
    length = len(word)
    padded = list(word) + ["X"] * (width - 1)
    for i in range(0, length, width):
        group = tuple(padded[i:i + width])
        if group not in seen:
            seen[group] = _base36(len(seen))
        res.append(seen[group])
    return "".join(res)


def _base36(n):
    digits = ""
    while True:
        n, rem = divmod(n, 36)
        digits = DIGITS36[rem] + digits
        if n == 0:
            return digits


def commonality_tier(rank):
    if rank < 500:
        return 0
    if rank < 1000:
        return 1
    if rank < 2000:
        return 3
    if rank < 5000:
        return 4
    return 5


def fold_word(word, charset, replacements):
    """
    `word` upper-cased with diacritics folded into the charset, or None
    when some symbol cannot be represented.
    """
    out = []
    for sym in charset.tokenize(word):
        if sym in charset:
            out.append(sym)
        elif sym in replacements:
            out.append(replacements[sym])
        else:
            return None
    return "".join(out)


class PatternDictionary:
    """Word list for one language indexed by make_pattern()."""

    def __init__(self, lang="en", charset=None):
        self.lang = lang
        self.charset = charset or CharacterSet.for_language(lang)
        self._index = defaultdict(list)

    @classmethod
    def from_lines(cls, lines, lang="en", charset=None):
        """
        Build from a word list, most common word first, one `WORD [count]`
        per line.  Words with a symbol outside the charset that cannot be
        folded are skipped.
        """
        dictionary = cls(lang, charset)
        replacements = get_replacements(lang)
        skipped = 0
        for rank, line in enumerate(lines):
            pieces = line.replace("\r", " ").split()
            if not pieces:
                continue
            word = fold_word(pieces[0], dictionary.charset, replacements)
            if word is None:
                logger.debug("skipping %s: not representable in %s", pieces[0], lang)
                skipped += 1
                continue
            try:
                count = int(pieces[1]) if len(pieces) > 1 else 0
            except ValueError:
                count = 0
            dictionary.add(DictionaryEntry(word, rank, count, commonality_tier(rank)))
        logger.debug("%s dictionary: %d patterns, %d words skipped",
                     lang, len(dictionary), skipped)
        return dictionary

    def add(self, entry):
        # one pattern digit per symbol, so a digraph counts once
        pattern = make_pattern(self.charset.tokenize(entry.word), 1)
        bucket = self._index[pattern]
        bucket.append(entry)
        if len(bucket) > 1 and bucket[-2].rank > entry.rank:
            bucket.sort(key=lambda e: e.rank)

    def __len__(self):
        return len(self._index)

    def __contains__(self, pattern):
        return pattern in self._index

    def candidates(self, pattern):
        """Entries sharing `pattern`, most common first.  Each call starts over."""
        return iter(tuple(self._index.get(pattern, ())))


def is_consistent(word, repl, used):
    """
    Can `word` sit under a cipher word whose known plaintext letters are
    `repl` (one entry per position, "" where unknown)?  Known positions
    must match exactly; unknown positions may not reuse a letter in `used`.
    """
    for i, c in enumerate(word):
        known = repl[i] if i < len(repl) else ""
        if known:
            if c != known:
                return False
        elif c in used:
            return False
    return True


def replacement_pattern(cipher_word, replacement):
    """
    The plaintext letters already revealed under each cipher symbol.

    With R->H and C->E known, "RJCXC" gives ["H", "", "E", "", "E"].
    """
    if isinstance(cipher_word, str):
        cipher_word = upper(cipher_word)
    return [replacement.get(c) or "" for c in cipher_word]


def find_candidates(cipher_word, replacement, dictionary, limit=None):
    """
    Dictionary words that fit `cipher_word` under a partial cipher->plain
    `replacement`, most common first.  No dictionary means no candidates.
    """
    if dictionary is None:
        return []
    symbols = dictionary.charset.tokenize(cipher_word)
    repl = replacement_pattern(symbols, replacement)
    used = {p for p in (replacement.get(c) for c in replacement) if p}
    res = []
    for entry in dictionary.candidates(make_pattern(symbols, 1)):
        if is_consistent(dictionary.charset.tokenize(entry.word), repl, used):
            res.append(entry)
            if limit is not None and len(res) >= limit:
                break
    return res
