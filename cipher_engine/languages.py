"""
Static language data for the cipher engine.

Everything here is read-only: charsets used when solving, the reduced
charsets used when encoding ACA style, the diacritic folding tables applied
before encoding / dictionary indexing, and the expected letter frequencies
used for Chi-Square scoring.
"""

from types import MappingProxyType

LANGUAGE_NAMES = {
    "en": "English",
    "nl": "Dutch",
    "de": "German",
    "eo": "Esperanto",
    "es": "Spanish",
    "fr": "French",
    "it": "Italian",
    "no": "Norwegian",
    "pt": "Portuguese",
    "sv": "Swedish",
    "ia": "Interlingua",
    "la": "Latin",
}

LATIN = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

# Symbols that are legal in a cipher for a given language.  Digraphs such as
# the Dutch IJ are single symbols.
LANGUAGE_CHARSETS = {
    "en": tuple(LATIN),
    "nl": tuple("ABCDEFGHI") + ("IJ",) + tuple("JKLMNOPQRSTUVWXYZ"),
    "de": tuple("AÄBCDEFGHIJKLMNOÖPQRSßTUÜVWXYZ"),
    "eo": tuple("ABCĈDEFGĜHĤIJĴKLMNOPRSŜTUŬVZ"),
    "es": tuple("ABCDEFGHIJKLMNÑOPQRSTUVWXYZ"),
    "fr": tuple(LATIN),
    "it": tuple(LATIN),
    "no": tuple("ABCDEFGHIJKLMNOPQRSTUVWXYZÅØÆ"),
    "pt": tuple("ABCDEFGHIJKL") + ("LH",) + tuple("MN") + ("NH",) + tuple("OPQRSTUVWXYZ"),
    "sv": tuple("AÅÄBCDEFGHIJKLMNOÖPQRSTUVWXYZ"),
    "ia": tuple(LATIN),
    "la": tuple(LATIN),
}

# Symbols used when encoding an ACA cipher
ACA_CHARSETS = {
    "en": LATIN,
    "nl": LATIN,
    "de": LATIN,
    "eo": LATIN,
    "es": "ABCDEFGHIJKLMNÑOPQRSTUVWXYZ",
    "fr": LATIN,
    "it": LATIN,
    "no": "ABCDEFGHIJKLMNOPRSTUVYZÆØÅ",
    "pt": LATIN,
    "sv": "AÅÄBCDEFGHIJKLMNOÖPRSTUVYZ",
    "ia": LATIN,
    "la": LATIN,
}

# Symbols the ACA charset is encoded to
ENCODING_CHARSETS = {
    lang: ("ABCDEFGHIJKLMNÑOPQRSTUVWXYZ" if lang == "es" else LATIN)
    for lang in LANGUAGE_NAMES
}

# Diacritics folded away before indexing a word list
LANGUAGE_REPLACEMENTS = {
    "en": {},
    "nl": {},
    "de": {},
    "eo": {},
    "es": {"Á": "A", "É": "E", "Í": "I", "Ó": "O", "Ú": "U", "Ü": "U", "Ý": "Y"},
    "fr": {
        "Ç": "C", "Â": "A", "À": "A", "É": "E", "Ê": "E", "È": "E", "Ë": "E",
        "Î": "I", "Ï": "I", "Ô": "O", "Û": "U", "Ù": "U", "Ü": "U",
    },
    "it": {"À": "A", "É": "E", "È": "E", "Ì": "I", "Ò": "O", "Ù": "U"},
    "no": {},
    "pt": {
        "Á": "A", "Â": "A", "Ã": "A", "À": "A", "Ç": "C", "È": "E", "Ê": "E",
        "Í": "I", "Ó": "O", "Ô": "O", "Õ": "O", "Ú": "U",
    },
    "sv": {},
    "ia": {},
    "la": {},
}

# Diacritics folded away when encoding an ACA cipher
ACA_REPLACEMENTS = dict(LANGUAGE_REPLACEMENTS)
ACA_REPLACEMENTS.update({
    "de": {"Ä": "A", "Ö": "O", "ß": "SS", "Ü": "U"},
    "eo": {"Ĉ": "C", "Ĝ": "G", "Ĥ": "H", "Ĵ": "J", "Ŝ": "S", "Ŭ": "U"},
    "it": {"É": "E", "È": "E", "Ì": "I", "Ò": "O", "Ù": "U"},
})

_FREQUENCIES = {
    "en": {
        "E": 0.1249, "T": 0.0928, "A": 0.0804, "O": 0.0764, "I": 0.0757,
        "N": 0.0723, "S": 0.0651, "R": 0.0628, "H": 0.0505, "L": 0.0407,
        "D": 0.0382, "C": 0.0334, "U": 0.0273, "M": 0.0251, "F": 0.024,
        "P": 0.0214, "G": 0.0187, "W": 0.0168, "Y": 0.0166, "B": 0.0148,
        "V": 0.0105, "K": 0.0054, "X": 0.0023, "J": 0.0016, "Q": 0.0012,
        "Z": 0.0009,
    },
    "nl": {
        "E": 0.204011, "N": 0.112494, "T": 0.0668511, "A": 0.0562471,
        "O": 0.0534809, "I": 0.0525588, "R": 0.0509451, "D": 0.0447211,
        "S": 0.0421853, "L": 0.0295067, "G": 0.027432, "H": 0.0246657,
        "M": 0.0239742, "V": 0.0214385, "B": 0.0189027, "W": 0.0189027,
        "K": 0.0186722, "U": 0.0165975, "P": 0.0156754, "C": 0.0147533,
        "IJ": 0.0124481, "Z": 0.0119871, "J": 0.0080682, "F": 0.005302,
        "É": 0.0011526, "X": 0.0002305,
    },
    "de": {
        "E": 0.149958, "N": 0.10262, "I": 0.0826712, "S": 0.0814877,
        "R": 0.0704987, "A": 0.0644125, "T": 0.0486898, "H": 0.0468301,
        "D": 0.046661, "U": 0.0365173, "G": 0.0360101, "L": 0.0339814,
        "B": 0.0255283, "O": 0.0255283, "F": 0.019104, "V": 0.016399,
        "K": 0.0162299, "M": 0.0162299, "W": 0.0155537, "Z": 0.008115,
        "Ü": 0.0079459, "P": 0.0064243, "Ä": 0.0050719, "Ö": 0.0030431,
        "J": 0.002705, "ß": 0.0006762, "Q": 0.0001691,
    },
    "eo": {
        "A": 0.122894, "E": 0.0982128, "O": 0.0917447, "N": 0.0837447,
        "I": 0.0791489, "S": 0.0568511, "R": 0.0558298, "T": 0.0556596,
        "L": 0.0549787, "K": 0.0408511, "M": 0.0309787, "P": 0.0308085,
        "D": 0.0294468, "U": 0.0292766, "J": 0.0248511, "V": 0.0228085,
        "G": 0.0153191, "B": 0.0093617, "C": 0.0088511, "F": 0.0069787,
        "Ü": 0.0062979, "Z": 0.0061277, "H": 0.0059575, "Ĝ": 0.0054468,
        "Ĉ": 0.0040851, "Ŝ": 0.0011915, "Ĵ": 0.0010213,
    },
    "es": {
        "E": 0.1408, "A": 0.1216, "O": 0.092, "S": 0.072, "N": 0.0683,
        "R": 0.0641, "I": 0.0598, "L": 0.0524, "U": 0.0469, "D": 0.0467,
        "T": 0.046, "C": 0.0387, "M": 0.0308, "P": 0.0289, "B": 0.0149,
        "H": 0.0118, "Q": 0.0111, "Y": 0.0109, "V": 0.0105, "G": 0.01,
        "F": 0.0069, "J": 0.0052, "Z": 0.0047, "Ñ": 0.0017, "X": 0.0014,
        "K": 0.0011, "W": 0.0004,
    },
    "fr": {
        "E": 0.1406753, "T": 0.0895584, "I": 0.0820779, "N": 0.0792727,
        "S": 0.0753247, "A": 0.073039, "R": 0.065039, "O": 0.0643117,
        "L": 0.0571429, "U": 0.0520519, "D": 0.0457143, "C": 0.0353247,
        "É": 0.0268052, "P": 0.0253506, "M": 0.0225455, "V": 0.0093506,
        "G": 0.0085195, "Q": 0.0083117, "F": 0.0082078, "B": 0.0078961,
        "À": 0.0065455, "H": 0.0047792, "X": 0.0045714, "Ê": 0.0023896,
        "Y": 0.0020779, "J": 0.0011429, "È": 0.001039, "Ù": 0.0004156,
        "Â": 0.0002078, "Ô": 0.0002078, "Û": 0.0001039,
    },
    "it": {
        "I": 0.137609, "E": 0.104323, "A": 0.0923483, "O": 0.0921453,
        "T": 0.0574386, "N": 0.0572356, "L": 0.0566268, "R": 0.0539882,
        "S": 0.0527704, "C": 0.0481023, "G": 0.038563, "U": 0.0355186,
        "D": 0.033083, "P": 0.0300386, "M": 0.0271971, "B": 0.0142074,
        "H": 0.0125837, "Z": 0.0125837, "È": 0.0103511, "V": 0.0101482,
        "F": 0.0085245, "Q": 0.00548,
    },
    "no": {
        "E": 0.16463, "N": 0.0888383, "A": 0.067923, "I": 0.0668876,
        "R": 0.0646096, "D": 0.0635742, "T": 0.0635742, "S": 0.0509422,
        "L": 0.0499068, "O": 0.0399669, "G": 0.0397598, "V": 0.0395527,
        "K": 0.0339615, "M": 0.0304411, "H": 0.0298198, "F": 0.0217436,
        "U": 0.0155312, "P": 0.0130462, "B": 0.0113895, "J": 0.0097329,
        "Ø": 0.0082833, "Å": 0.0070408, "Y": 0.0057983, "Æ": 0.0, "C": 0.0,
        "Z": 0.0,
    },
    "pt": {
        "E": 0.148438, "A": 0.121094, "O": 0.102711, "I": 0.0714614,
        "R": 0.0597426, "S": 0.0574449, "D": 0.053079, "M": 0.0500919,
        "T": 0.0500919, "N": 0.0471048, "U": 0.0381434, "C": 0.0358456,
        "L": 0.0310202, "V": 0.0186121, "P": 0.0183824, "G": 0.0126379,
        "B": 0.0091912, "Ã": 0.0087316, "Q": 0.0082721, "F": 0.0080423,
        "H": 0.0080423, "Ç": 0.0055147, "Z": 0.0032169, "Á": 0.0029871,
        "Ê": 0.0029871, "NH": 0.0025276, "É": 0.0022978, "J": 0.0018382,
        "Ó": 0.0016085, "X": 0.0013787, "LH": 0.0009191, "Â": 0.0004596,
        "Õ": 0.0002298, "W": 0.0, "Y": 0.0,
    },
    "sv": {
        "N": 0.102144, "A": 0.0962783, "E": 0.0958738, "R": 0.0671521,
        "T": 0.0647249, "I": 0.0552184, "S": 0.0533981, "D": 0.0523867,
        "L": 0.0517799, "O": 0.0410599, "V": 0.0400485, "H": 0.0386327,
        "M": 0.0351942, "G": 0.0287217, "K": 0.0287217, "F": 0.0218447,
        "Ä": 0.0212379, "Ö": 0.0147654, "P": 0.0141586, "C": 0.0141586,
        "Å": 0.013754, "U": 0.0133495, "B": 0.0121359, "J": 0.00768608,
        "Y": 0.0052589, "X": 0.000202265,
    },
    "ia": {
        "E": 0.1729506, "T": 0.0905528, "A": 0.0898115, "I": 0.0847278,
        "O": 0.0773141, "N": 0.0724423, "R": 0.0647109, "L": 0.064499,
        "S": 0.0635459, "C": 0.0420462, "D": 0.0416225, "U": 0.035268,
        "P": 0.0267952, "M": 0.021076, "B": 0.0102732, "H": 0.0083669,
        "V": 0.0083669, "F": 0.008261, "G": 0.0075196, "Q": 0.0073078,
        "J": 0.0009532, "X": 0.0009532, "Y": 0.0006355, "K": 0.0, "W": 0.0,
        "Z": 0.0,
    },
    "la": {
        "I": 0.1333172, "E": 0.123415, "T": 0.0906895, "A": 0.0809081,
        "S": 0.0775269, "U": 0.075957, "N": 0.0640019, "O": 0.058447,
        "R": 0.0528922, "M": 0.0495109, "C": 0.0362275, "P": 0.0299481,
        "D": 0.0266876, "L": 0.0251177, "Q": 0.0163024, "B": 0.0161816,
        "G": 0.0108683, "V": 0.0102645, "H": 0.0091776, "F": 0.0089361,
        "X": 0.0036228, "J": 0.0, "K": 0.0, "W": 0.0, "Y": 0.0, "Z": 0.0,
    },
}

# Expected relative frequency of each symbol, one read-only profile per language
LANGUAGE_FREQUENCIES = MappingProxyType({
    lang: MappingProxyType(profile) for lang, profile in _FREQUENCIES.items()
})


def get_profile(lang):
    """Frequency profile for `lang`, or an empty mapping when there is none."""
    return LANGUAGE_FREQUENCIES.get(lang, MappingProxyType({}))


def get_charset(lang):
    """Solving charset for `lang`.  Unknown languages fall back to A-Z."""
    return LANGUAGE_CHARSETS.get(lang, LANGUAGE_CHARSETS["en"])


def get_replacements(lang, aca=False):
    table = ACA_REPLACEMENTS if aca else LANGUAGE_REPLACEMENTS
    return table.get(lang, {})
