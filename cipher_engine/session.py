import copy
import logging
from collections import Counter

from cipher_engine.charset import CharacterSet
from cipher_engine.frequency_analyser import chi_square, crib_chi_square
from cipher_engine.history import UndoRedoStack
from cipher_engine.languages import LANGUAGE_NAMES, get_profile
from cipher_engine.replacement import ReplacementMap
from cipher_engine.segmenter import (
    DECODE, ENCODE, build_replacement, build_tabular, clean_string,
)
from cipher_engine.tabular import CipherType

logger = logging.getLogger(__name__)

# Monoalphabetic replacement, driven by the replacement map instead of a key
ARISTOCRAT = "aristocrat"

DEFAULT_STATE = {
    "cipher_type": CipherType.VIGENERE.value,
    "keyword": "",
    "cipher_string": "",
    "find_string": "",
    "replacement": {},
    "curlang": "en",
    "operation": ENCODE,
    "block_size": 0,
    "aca": False,
}


class CipherSession:
    """
    One cipher being edited: its state, the frequency table of the last
    encode pass and the undo history.  Setters return True when they
    actually changed something so the caller knows whether to refresh.
    """

    def __init__(self, lang="en", state=None):
        self.state = copy.deepcopy(DEFAULT_STATE)
        self.state["curlang"] = lang if lang in LANGUAGE_NAMES else "en"
        if state:
            self.restore(state)
        self.charset = CharacterSet.for_language(self.state["curlang"])
        self.freq = Counter()
        self.history = UndoRedoStack(self.save, self.restore)

    # ---- snapshots ----
    def save(self):
        return copy.deepcopy(self.state)

    def restore(self, data):
        state = copy.deepcopy(DEFAULT_STATE)
        for key, value in data.items():
            state[key] = copy.deepcopy(value)
        self.state = state
        self.charset = CharacterSet.for_language(self.state["curlang"])

    def mark_undo(self, tag=None):
        self.history.mark_undo(tag)

    def undo(self):
        return self.history.undo()

    def redo(self):
        return self.history.redo()

    # ---- setters ----
    def _set(self, field, value):
        if self.state.get(field) == value:
            return False
        self.state[field] = value
        return True

    def set_cipher_type(self, cipher_type):
        if isinstance(cipher_type, CipherType):
            cipher_type = cipher_type.value
        return self._set("cipher_type", cipher_type)

    def set_keyword(self, keyword):
        return self._set("keyword", keyword)

    def set_cipher_string(self, cipher_string):
        return self._set("cipher_string", cipher_string)

    def set_find_string(self, find_string):
        return self._set("find_string", find_string)

    def set_operation(self, operation):
        if operation not in (ENCODE, DECODE):
            return False
        return self._set("operation", operation)

    def set_block_size(self, block_size):
        return self._set("block_size", max(0, int(block_size)))

    def set_aca(self, aca):
        return self._set("aca", bool(aca))

    def set_char(self, source, target):
        """Replacement map edit; a target already in use is moved, not shared."""
        repl = ReplacementMap(self.state["replacement"])
        changed = repl.assign(source, target)
        if changed:
            self.state["replacement"] = repl.to_dict()
        return changed

    def load_language(self, lang):
        if lang not in LANGUAGE_NAMES:
            logger.debug("unknown language %r", lang)
            return False
        self.charset = CharacterSet.for_language(lang)
        return self._set("curlang", lang)

    # ---- output ----
    def encode_lines(self, max_width=53):
        """Current cipher string as LineSegment pairs; refreshes self.freq."""
        message = clean_string(self.state["cipher_string"])
        if self.state["cipher_type"] == ARISTOCRAT:
            return build_replacement(message, self.state["replacement"], max_width,
                                     self.state["curlang"], freq=self.freq,
                                     aca=self.state["aca"])
        return build_tabular(
            message,
            self.state["keyword"],
            self.state["cipher_type"],
            self.state["operation"],
            max_width,
            self.state["block_size"],
            freq=self.freq,
        )

    def chi_square(self):
        return chi_square(self.freq, get_profile(self.state["curlang"]))

    def crib_chi_square(self, match_freq):
        return crib_chi_square(match_freq, self.freq, get_profile(self.state["curlang"]))
