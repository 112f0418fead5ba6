# cipher_engine/tabular.py
from abc import ABC, abstractmethod
from enum import Enum

# ==============================
#  Common alphabet + utilities
# ==============================
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
ALPHA_LEN = len(ALPHABET)
DIGITS = "0123456789"

# Returned when either input symbol cannot be mapped
INVALID = "?"


class CipherType(str, Enum):
    VIGENERE = "vigenere"
    VARIANT = "variant"
    BEAUFORT = "beaufort"
    GRONSFELD = "gronsfeld"
    PORTA = "porta"
    PORTAX = "portax"


def letter_value(ch):
    """0-25 for a Latin letter (either case), None for anything else."""
    if not isinstance(ch, str) or len(ch) != 1:
        return None
    pos = ALPHABET.find(ch.upper())
    return pos if pos >= 0 else None


def to_letter(val):
    # decode paths go negative; fold back into [0, 26) before indexing
    return ALPHABET[((val % ALPHA_LEN) + ALPHA_LEN) % ALPHA_LEN]


class Mapper(ABC):
    """
    One tabular cipher: maps a single plaintext / key symbol pair to a
    cipher symbol and back.  Every method returns INVALID instead of
    raising so a caller walking a long message can keep going.
    """

    name = ""

    @abstractmethod
    def encode(self, plain, key):
        """Cipher symbol for `plain` under `key`."""

    @abstractmethod
    def decode(self, cipher, key):
        """Plain symbol for `cipher` under `key`."""

    @abstractmethod
    def decode_key(self, cipher, plain):
        """Key symbol that turns `plain` into `cipher`."""

    def key_value(self, key):
        return letter_value(key)

    def __repr__(self):
        return f"{type(self).__name__}()"


# ==============================
#  VIGENERE
# ==============================
class VigenereMapper(Mapper):
    name = CipherType.VIGENERE

    def encode(self, plain, key):
        p, k = letter_value(plain), self.key_value(key)
        if p is None or k is None:
            return INVALID
        return to_letter(p + k)

    def decode(self, cipher, key):
        c, k = letter_value(cipher), self.key_value(key)
        if c is None or k is None:
            return INVALID
        return to_letter(c - k)

    def decode_key(self, cipher, plain):
        c, p = letter_value(cipher), letter_value(plain)
        if c is None or p is None:
            return INVALID
        return to_letter(c - p)


# ==============================
#  VARIANT
# ==============================
class VariantMapper(VigenereMapper):
    """Vigenère with the key reflected: key K shifts by 26 - K."""

    name = CipherType.VARIANT

    def key_value(self, key):
        k = letter_value(key)
        if k is None:
            return None
        return 0 if k == 0 else ALPHA_LEN - k

    def decode_key(self, cipher, plain):
        c, p = letter_value(cipher), letter_value(plain)
        if c is None or p is None:
            return INVALID
        return to_letter(p - c)


# ==============================
#  BEAUFORT
# ==============================
class BeaufortMapper(Mapper):
    """c = k - p.  Reciprocal, so encode and decode are the same table."""

    name = CipherType.BEAUFORT

    def encode(self, plain, key):
        p, k = letter_value(plain), letter_value(key)
        if p is None or k is None:
            return INVALID
        return to_letter(k - p)

    def decode(self, cipher, key):
        return self.encode(cipher, key)

    def decode_key(self, cipher, plain):
        c, p = letter_value(cipher), letter_value(plain)
        if c is None or p is None:
            return INVALID
        return to_letter(c + p)


# ==============================
#  GRONSFELD
# ==============================
class GronsfeldMapper(VigenereMapper):
    """Vigenère restricted to the first ten columns, keyed by digits."""

    name = CipherType.GRONSFELD

    def key_value(self, key):
        if not isinstance(key, str) or len(key) != 1 or key not in DIGITS:
            return None
        return DIGITS.index(key)

    def decode_key(self, cipher, plain):
        c, p = letter_value(cipher), letter_value(plain)
        if c is None or p is None:
            return INVALID
        shift = (c - p) % ALPHA_LEN
        if shift >= len(DIGITS):
            return INVALID
        return DIGITS[shift]


# ==============================
#  PORTA / PORTAX
# ==============================
HALF = ALPHA_LEN // 2


def _porta_row(row, direction):
    """
    One reciprocal row of a 13-row table.  The first half of the alphabet
    maps into the second half slid by `row` places; the second half maps
    back the other way so every row is its own inverse.
    """
    out = [""] * ALPHA_LEN
    for p in range(HALF):
        c = HALF + (p + direction * row) % HALF
        out[p] = ALPHABET[c]
        out[c] = ALPHABET[p]
    return "".join(out)


# Row r serves the key pair (2r, 2r + 1): AB, CD, ... YZ
PORTA_TABLE = tuple(_porta_row(r, 1) for r in range(HALF))
PORTAX_TABLE = tuple(_porta_row(r, -1) for r in range(HALF))


class PortaMapper(Mapper):
    name = CipherType.PORTA
    table = PORTA_TABLE

    def encode(self, plain, key):
        p, k = letter_value(plain), letter_value(key)
        if p is None or k is None:
            return INVALID
        return self.table[k // 2][p]

    def decode(self, cipher, key):
        return self.encode(cipher, key)

    def decode_key(self, cipher, plain):
        """
        First letter of the key pair whose row maps `plain` to `cipher`.
        The two letters of a pair share a row, so the pair cannot be split.
        """
        c, p = letter_value(cipher), letter_value(plain)
        if c is None or p is None:
            return INVALID
        for row, mapping in enumerate(self.table):
            if mapping[p] == ALPHABET[c]:
                return ALPHABET[row * 2]
        return INVALID


class PortaxMapper(PortaMapper):
    """
    Per-letter approximation of Portax: a Porta-style reciprocal table with
    the slide running the other way.  ACA Portax is digraphic and is not
    what this mapper produces.
    """

    name = CipherType.PORTAX
    table = PORTAX_TABLE


_MAPPERS = {
    CipherType.VIGENERE: VigenereMapper,
    CipherType.VARIANT: VariantMapper,
    CipherType.BEAUFORT: BeaufortMapper,
    CipherType.GRONSFELD: GronsfeldMapper,
    CipherType.PORTA: PortaMapper,
    CipherType.PORTAX: PortaxMapper,
}


def parse_cipher_type(cipher_type):
    """CipherType for an enum member or its name, Vigenère when unknown."""
    if isinstance(cipher_type, CipherType):
        return cipher_type
    try:
        return CipherType((cipher_type or "").strip().lower())
    except (ValueError, AttributeError):
        return CipherType.VIGENERE


def mapper_factory(cipher_type):
    return _MAPPERS[parse_cipher_type(cipher_type)]()
