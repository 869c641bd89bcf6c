import pytest

from wordscan.core.matcher import find_whole_word, is_whole_word_match


@pytest.mark.parametrize(
    "line",
    [b"cat", b"cat\n", b"a cat sat", b"(cat)", b"cat.", b"\tcat\r\n", b"dog,cat;bird", b"cat_food"],
)
def test_standalone_word_matches(line):
    assert find_whole_word(line, b"cat") >= 0


@pytest.mark.parametrize(
    "line",
    [b"category", b"cats are nice", b"concat", b"bobcats", b"cat9", b"9cat"],
)
def test_word_inside_longer_token_does_not_match(line):
    assert find_whole_word(line, b"cat") == -1


def test_later_whole_word_found_after_failed_candidate():
    line = b"category and cat\n"
    assert find_whole_word(line, b"cat") == 13


def test_overlapping_candidate_retried_one_byte_later():
    # "aa" occurs at 0 (followed by "a") and again at 1 (preceded by "a"),
    # then whole at 4.
    assert find_whole_word(b"aaa aa", b"aa") == 4


def test_case_sensitive_by_default():
    assert find_whole_word(b"Word here", b"word") == -1
    assert find_whole_word(b"word here", b"word") == 0


def test_case_insensitive_both_directions():
    assert find_whole_word(b"Word here", b"word", case_insensitive=True) == 0
    assert find_whole_word(b"see word", b"WORD", case_insensitive=True) == 4
    assert find_whole_word(b"see Readme for details\n", b"README", case_insensitive=True) == 4


def test_non_ascii_bytes_are_word_characters():
    assert find_whole_word("caté".encode("utf-8"), b"cat") == -1
    assert find_whole_word(b"\xffcat", b"cat") == -1


def test_invalid_utf8_does_not_stop_scanning():
    assert find_whole_word(b"\xc3\x28 cat \xa0\xa1", b"cat") == 3


def test_empty_word_never_matches():
    assert find_whole_word(b"anything", b"") == -1
    assert not is_whole_word_match(b"anything", 0, b"")


def test_is_whole_word_match_checks_both_edges():
    line = b"x cat y"
    assert is_whole_word_match(line, 2, b"cat")
    assert not is_whole_word_match(line, 1, b"cat")
    assert not is_whole_word_match(b"xcat y", 1, b"cat")
    assert not is_whole_word_match(b"x caty", 2, b"cat")
    assert not is_whole_word_match(b"x ca", 2, b"cat")
