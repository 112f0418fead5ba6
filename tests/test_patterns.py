"""
Word pattern tests
==================
Run with:  python -m pytest tests/ -v
"""

import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest
from cipher_engine.charset import CharacterSet
from cipher_engine.patterns import (
    PatternDictionary,
    commonality_tier,
    find_candidates,
    fold_word,
    is_consistent,
    make_pattern,
    replacement_pattern,
)
from cipher_engine.replacement import ReplacementMap

WORDS = ["THAT 900", "WHAT 800", "SAYS 700", "DEED 600", "TEXT 500", "THE 400"]


@pytest.fixture
def dictionary():
    return PatternDictionary.from_lines(WORDS, "en")


# ── make_pattern ──────────────────────────────────────────────────────────────
@pytest.mark.parametrize("word,expected", [
    ("ABCABC", "012012"),
    ("XYZZY", "01221"),
    ("THAT", "0120"),
    ("A", "0"),
    ("", ""),
])
def test_make_pattern(word, expected):
    assert make_pattern(word) == expected


def test_words_with_the_same_shape_share_a_pattern():
    assert make_pattern("LETTER") == make_pattern("SETTER") == "012213"
    assert make_pattern("LETTER") != make_pattern("SCOTER")


def test_make_pattern_groups():
    assert make_pattern("..--X..X..X", 2) == "012304"
    # odd length: the last group is padded with X
    assert make_pattern("ABAB", 3) == "01"
    assert make_pattern("AB", 7) == "0"


def test_make_pattern_accepts_symbol_lists():
    assert make_pattern(["IJ", "S", "IJ"]) == "010"


def test_make_pattern_rejects_zero_width():
    with pytest.raises(ValueError):
        make_pattern("ABC", 0)


def test_make_pattern_goes_past_base36():
    word = [f"S{i}" for i in range(40)]
    pattern = make_pattern(word)
    assert pattern.startswith("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    assert pattern.endswith("10111213")


# ── Dictionary ────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("rank,tier", [
    (0, 0), (499, 0), (500, 1), (999, 1), (1000, 3), (1999, 3),
    (2000, 4), (4999, 4), (5000, 5), (40000, 5),
])
def test_commonality_tier(rank, tier):
    assert commonality_tier(rank) == tier


def test_from_lines_indexes_by_pattern(dictionary):
    assert "0120" in dictionary
    assert "0123" in dictionary
    assert "012" in dictionary
    first = next(dictionary.candidates("0120"))
    assert first.word == "THAT"
    assert first.rank == 0
    assert first.frequency == 900
    assert first.tier == 0


def test_from_lines_skips_blank_and_unrepresentable_words():
    d = PatternDictionary.from_lines(["", "CAFÉ", "  \r", "TEA"], "en")
    assert len(d) == 1
    assert [e.word for e in d.candidates("012")] == ["TEA"]
    assert next(d.candidates("012")).rank == 3


def test_from_lines_folds_diacritics():
    d = PatternDictionary.from_lines(["été", "café"], "fr")
    assert [e.word for e in d.candidates("010")] == ["ETE"]
    assert [e.word for e in d.candidates("0123")] == ["CAFE"]


def test_from_lines_missing_count_is_zero():
    d = PatternDictionary.from_lines(["DOG", "CAT many"], "en")
    assert [e.frequency for e in d.candidates("012")] == [0, 0]


def test_dutch_digraph_is_one_pattern_symbol():
    d = PatternDictionary.from_lines(["IJS"], "nl")
    assert "01" in d


def test_candidates_restart_and_keep_rank_order(dictionary):
    first = [e.word for e in dictionary.candidates("0120")]
    second = [e.word for e in dictionary.candidates("0120")]
    assert first == second == ["THAT", "SAYS", "TEXT"]
    assert list(dictionary.candidates("0000")) == []


def test_fold_word():
    fr = CharacterSet.for_language("fr")
    assert fold_word("Noël", fr, {"Ë": "E"}) == "NOEL"
    assert fold_word("Noël", fr, {}) is None


# ── Candidate search ──────────────────────────────────────────────────────────
def test_is_consistent():
    assert is_consistent("HATCH", ["H", "", "", "", "H"], {"H"})
    assert not is_consistent("HATCH", ["", "", "", "", ""], {"H"})
    assert not is_consistent("HATCH", ["C", "", "", "", ""], {"C"})
    assert is_consistent("HATCH", [], set())


def test_replacement_pattern():
    repl = {"R": "H", "C": "E"}
    assert replacement_pattern("rjcxc", repl) == ["H", "", "E", "", "E"]


@pytest.mark.parametrize("known,expected", [
    ({}, ["THAT", "SAYS", "TEXT"]),
    ({"Q": "T"}, ["THAT", "TEXT"]),
    ({"Q": "T", "Z": "E"}, ["TEXT"]),
    ({"Z": "H"}, ["THAT"]),
    ({"Z": "Q"}, []),
])
def test_find_candidates(dictionary, known, expected):
    found = find_candidates("QZRQ", ReplacementMap(known), dictionary)
    assert [e.word for e in found] == expected


def test_find_candidates_limit_and_missing_dictionary(dictionary):
    assert [e.word for e in find_candidates("QZRQ", {}, dictionary, limit=1)] == ["THAT"]
    assert find_candidates("QZRQ", {}, None) == []
