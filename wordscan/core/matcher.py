from __future__ import annotations
import string

# C-locale isspace()/ispunct(); bytes >= 0x80 count as word characters.
WHITESPACE_BYTES = frozenset(b" \t\n\v\f\r")
PUNCTUATION_BYTES = frozenset(string.punctuation.encode("ascii"))
BOUNDARY_BYTES = WHITESPACE_BYTES | PUNCTUATION_BYTES


def _is_boundary(byte: int) -> bool:
    return byte in BOUNDARY_BYTES


def _fold(data: bytes) -> bytes:
    # bytes.lower() only touches ASCII letters, so offsets stay aligned.
    return data.lower()


def is_whole_word_match(line: bytes, offset: int, word: bytes, case_insensitive: bool = False) -> bool:
    """Check whether ``word`` occurs at ``offset`` in ``line`` as a whole word.

    The preceding byte (if any) and the following byte (if any) must both be
    whitespace or punctuation. Start and end of the line count as boundaries.
    """
    if not word or offset < 0:
        return False
    end = offset + len(word)
    if end > len(line):
        return False

    candidate = line[offset:end]
    if case_insensitive:
        if _fold(candidate) != _fold(word):
            return False
    elif candidate != word:
        return False

    if offset > 0 and not _is_boundary(line[offset - 1]):
        return False
    if end < len(line) and not _is_boundary(line[end]):
        return False
    return True


def find_whole_word(line: bytes, word: bytes, case_insensitive: bool = False) -> int:
    """Return the offset of the first whole-word occurrence of ``word``, or -1.

    Candidates come from a plain substring search; when a candidate fails the
    boundary test the search resumes one byte after that candidate's start.
    """
    if not word:
        return -1
    haystack = _fold(line) if case_insensitive else line
    needle = _fold(word) if case_insensitive else word

    pos = haystack.find(needle)
    while pos != -1:
        if is_whole_word_match(line, pos, word, case_insensitive):
            return pos
        pos = haystack.find(needle, pos + 1)
    return -1
