import pytest
from hypothesis import given, strategies as st

from songlib.catalog.verses import VERSE_DELIMITER, join_verses, split_verses


@pytest.mark.unit
def test_split_on_blank_lines_keeps_single_newlines():
    blob = "line one\nline two\n\nline three\nline four\n\nlast"
    assert split_verses(blob) == ["line one\nline two", "line three\nline four", "last"]


@pytest.mark.unit
def test_empty_blob_has_no_verses():
    assert split_verses("") == []
    assert join_verses([]) == ""


@pytest.mark.unit
def test_single_verse_without_delimiter():
    assert split_verses("just one\nverse") == ["just one\nverse"]


@pytest.mark.unit
def test_join_inserts_delimiter_between_verses():
    assert join_verses(["a", "b\nc"]) == "a" + VERSE_DELIMITER + "b\nc"


@pytest.mark.unit
def test_three_newlines_leave_leading_newline_on_next_verse():
    verses = split_verses("a\n\n\nb")
    assert verses == ["a", "\nb"]
    assert join_verses(verses) == "a\n\n\nb"


@pytest.mark.unit
@given(st.text(alphabet=st.sampled_from(["a", "b", " ", "\n", "é"]), max_size=60))
def test_join_inverts_split(blob):
    assert join_verses(split_verses(blob)) == blob


@pytest.mark.unit
@given(st.lists(st.text(alphabet="xyz \n", min_size=1, max_size=10).filter(
    lambda s: "\n\n" not in s and not s.startswith("\n") and not s.endswith("\n")
), min_size=1, max_size=8))
def test_split_inverts_join_for_clean_verses(verses):
    assert split_verses(join_verses(verses)) == verses
