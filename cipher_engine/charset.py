from cipher_engine.languages import LATIN, get_charset


def upper(text):
    """Upper-case one character at a time so that a sharp s stays one symbol."""
    out = []
    for ch in text:
        up = ch.upper()
        out.append(up if len(up) == len(ch) else ch)
    return "".join(out)


class CharacterSet:
    """
    Ordered set of cipher symbols.

    A symbol is usually one letter, but some languages carry digraphs
    (Dutch IJ, Portuguese NH / LH) which must be counted, indexed and
    replaced as one unit.  `tokenize` always prefers the longest symbol
    that matches at the current position.
    """

    def __init__(self, symbols=LATIN):
        if isinstance(symbols, str):
            symbols = tuple(symbols)
        self.symbols = tuple(upper(s) for s in symbols)
        self._index = {s: i for i, s in enumerate(self.symbols)}
        self._widths = sorted({len(s) for s in self.symbols}, reverse=True) or [1]

    @classmethod
    def for_language(cls, lang):
        return cls(get_charset(lang))

    def __len__(self):
        return len(self.symbols)

    def __iter__(self):
        return iter(self.symbols)

    def __contains__(self, symbol):
        return upper(symbol) in self._index

    def __eq__(self, other):
        if isinstance(other, CharacterSet):
            return self.symbols == other.symbols
        return NotImplemented

    def __hash__(self):
        return hash(self.symbols)

    def __repr__(self):
        return f"CharacterSet({''.join(self.symbols)!r})"

    def tokenize(self, text):
        """
        Split `text` into upper-cased symbols.  Characters outside the set
        come back as single-character tokens so callers can pass them
        through untouched.
        """
        text = upper(text)
        tokens = []
        i = 0
        n = len(text)
        while i < n:
            for width in self._widths:
                piece = text[i:i + width]
                if len(piece) == width and piece in self._index:
                    tokens.append(piece)
                    i += width
                    break
            else:
                tokens.append(text[i])
                i += 1
        return tokens


def as_charset(charset):
    """Accept a CharacterSet, a plain string or a sequence of symbols."""
    if charset is None:
        return CharacterSet()
    if isinstance(charset, CharacterSet):
        return charset
    return CharacterSet(charset)
