from __future__ import annotations
import pytest

from lineparse.split.tokenizer import Tokenizer, group_spans, split_line
from lineparse.types import UNLIMITED


def _idx(res):
    return res.indices.tolist()


def test_space_and_tab():
    tok = Tokenizer([" ", "\t"])
    res = tok.tokenize("a b\tc")
    assert _idx(res) == [1, -1, 2, -1, 3]
    assert res.word_count == 3
    assert tok.split("a b\tc") == ["a", "b", "c"]


def test_overlapping_self_match_consumes_both():
    tok = Tokenizer(["test"])
    res = tok.tokenize("testestimate")
    assert res.word_count == 1
    assert _idx(res) == [-1] * 7 + [1] * 5
    assert tok.split("testestimate") == ["imate"]


def test_complete_mode_restarts_after_match():
    tok = Tokenizer(["test"], match_mode="complete")
    assert tok.split("testestimate") == ["estimate"]


def test_self_overlap_blend_vs_complete():
    assert split_line("aaab", ["aa"]) == ["b"]
    assert split_line("aaab", ["aa"], match_mode="complete") == ["ab"]


def test_extent_buffer_encoding():
    buf = Tokenizer(["test"]).extents("testestimate")
    assert buf.shape == (13,)
    expected = [0] * 13
    expected[0], expected[3], expected[4], expected[7] = -4, -4, 4, 4
    assert buf.tolist() == expected
    assert int(buf.sum()) == 0


def test_leading_and_repeated_delimiters():
    assert split_line("  ab", [" "]) == ["ab"]
    assert split_line("a   b", [" "]) == ["a", "b"]


def test_trailing_delimiter_makes_no_group():
    res = Tokenizer([" "]).tokenize("ab  ")
    assert _idx(res) == [1, 1, -1, -1]
    assert res.word_count == 1


def test_no_patterns_is_one_whole_line_group():
    for pats in (None, []):
        res = Tokenizer(pats).tokenize("hello world")
        assert res.word_count == 1
        assert split_line("hello world", pats) == ["hello world"]


def test_empty_line_and_delimiter_only_line():
    tok = Tokenizer([" "])
    for line in ("", "   "):
        res = tok.tokenize(line)
        assert res.word_count == 0
        assert len(res) == 0


def test_whole_line_is_one_match():
    assert Tokenizer(["aa"]).tokenize("aaa").word_count == 0


def test_overlapping_different_patterns_add_up():
    assert split_line("a--b", ["-", "--"]) == ["a", "b"]
    assert Tokenizer(["-", "--"]).extents("a--b").tolist() == [0, -3, 0, 3, 0]


def test_multi_char_delimiters():
    tok = Tokenizer(["test", "another splitter", " ", "\t", "'"])
    line = "one test two another splitter 'three'\tfour"
    assert tok.split(line) == ["one", "two", "three", "four"]


def test_cap_folds_rest_into_last_group():
    res = Tokenizer([" "]).tokenize("a b c d", max_groups=2)
    assert _idx(res) == [1, -1, 2, 2, 2, 2, 2]
    assert res.word_count == 2
    assert split_line("a b c d", [" "], 2) == ["a", "b c d"]


def test_cap_still_trims_trailing_delimiter():
    res = Tokenizer([" "]).tokenize("a b c ", max_groups=2)
    assert _idx(res) == [1, -1, 2, 2, 2, -1]


def test_cap_of_one_keeps_everything():
    assert split_line("  a b\tc", [" ", "\t"], 1) == ["a b\tc"]


@pytest.mark.parametrize("cap", [0, -1, -7, None, UNLIMITED])
def test_non_positive_cap_means_unlimited(cap):
    assert split_line("a b c", [" "], cap) == ["a", "b", "c"]


def test_empty_delimiter_splits_every_character():
    tok = Tokenizer([""])
    assert tok.table.has_empty
    res = tok.tokenize("abc")
    assert _idx(res) == [1, 2, 3]
    assert tok.split("abc") == ["a", "b", "c"]


def test_empty_delimiter_with_other_patterns():
    tok = Tokenizer(["", " "])
    assert _idx(tok.tokenize("ab c")) == [1, 2, -1, 3]


def test_empty_delimiter_cap_reclaims_gaps():
    tok = Tokenizer(["", " "])
    res = tok.tokenize("ab c", max_groups=2)
    assert _idx(res) == [1, 2, 2, 2]
    assert tok.split("ab c", 2) == ["a", "b c"]


def test_pattern_longer_than_line_is_skipped():
    assert split_line("ab", ["abc"]) == ["ab"]


def test_replacing_patterns_rebuilds_table():
    tok = Tokenizer([" "])
    tok.patterns = [","]
    assert tok.patterns == (",",)
    assert tok.split("a,b c") == ["a", "b c"]


def test_bad_inputs():
    with pytest.raises(TypeError):
        Tokenizer([" "]).tokenize(None)
    with pytest.raises(ValueError):
        Tokenizer([" "], match_mode="fuzzy")


def test_group_spans():
    assert group_spans([-1, 1, 1, -1, 2]) == [(1, 3), (4, 5)]
    assert group_spans([1, 2, 3]) == [(0, 1), (1, 2), (2, 3)]
    assert group_spans([]) == []


def test_result_as_dict():
    res = Tokenizer([" "]).tokenize("a b")
    assert res.as_dict() == {"indices": [1, -1, 2], "word_count": 2}
