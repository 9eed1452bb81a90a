import pytest
from hypothesis import HealthCheck, given, settings, strategies as st

from songlib.catalog import (
    clear_catalog,
    create_song,
    decode_cursor,
    decode_group_cursor,
    delete_song,
    encode_cursor,
    encode_group_cursor,
    iter_catalog,
    list_all,
    list_by_group,
)
from songlib.errors import ValidationError

CATALOG = [
    ("Uprising", "Muse"),
    ("Hysteria", "Muse"),
    ("Yellow", "Coldplay"),
    ("Fix You", "Coldplay"),
    ("Starlight", "Muse"),
    ("Creep", "Radiohead"),
    ("Karma Police", "Radiohead"),
    ("Clocks", "Coldplay"),
]


def _order_key(song):
    return (song.group_name, song.title, song.id)


@pytest.fixture
def catalog(db_session):
    return [create_song(title, group, "01.01.2001", "", "") for title, group in CATALOG]


@pytest.mark.unit
def test_first_page_is_smallest_entries_in_order(catalog):
    page = list_all(None, 3)
    assert [(s.group_name, s.title) for s in page] == [
        ("Coldplay", "Clocks"),
        ("Coldplay", "Fix You"),
        ("Coldplay", "Yellow"),
    ]


@pytest.mark.unit
def test_next_page_excludes_boundary_entry(catalog):
    first = list_all(None, 3)
    params = encode_cursor(first[-1])
    second = list_all(decode_cursor(params["prevGroup"], params["prevSong"]), 3)
    assert [(s.group_name, s.title) for s in second] == [
        ("Muse", "Hysteria"),
        ("Muse", "Starlight"),
        ("Muse", "Uprising"),
    ]
    assert first[-1].id not in {s.id for s in second}


@pytest.mark.unit
def test_short_page_then_empty_page_at_the_end(catalog):
    cursor = decode_cursor("Radiohead", "Creep")
    last = list_all(cursor, 10)
    assert [s.title for s in last] == ["Karma Police"]
    params = encode_cursor(last[-1])
    assert list_all(decode_cursor(params["prevGroup"], params["prevSong"]), 10) == []


@pytest.mark.unit
def test_cursor_seeks_by_value_even_if_boundary_was_deleted(catalog):
    hysteria = next(s for s in list_by_group("Muse") if s.title == "Hysteria")
    delete_song(hysteria.id)
    page = list_all(decode_cursor("Muse", "Hysteria"), 2)
    assert [s.title for s in page] == ["Starlight", "Uprising"]


@pytest.mark.unit
def test_forged_cursor_between_entries(catalog):
    page = list_all(decode_cursor("D", "anything"), 2)
    assert [(s.group_name, s.title) for s in page] == [("Muse", "Hysteria"), ("Muse", "Starlight")]


@pytest.mark.unit
def test_full_enumeration_visits_every_entry_once(catalog):
    seen = []
    cursor = None
    while True:
        page = list_all(cursor, 3)
        if not page:
            break
        assert len(page) <= 3
        seen.extend(page)
        params = encode_cursor(page[-1])
        cursor = decode_cursor(params["prevGroup"], params["prevSong"])

    assert sorted(s.id for s in seen) == sorted(catalog)
    assert [_order_key(s) for s in seen] == sorted(_order_key(s) for s in seen)


@pytest.mark.unit
def test_iter_catalog_matches_manual_walk(catalog):
    walked = [s.id for s in iter_catalog(page_size=2)]
    assert sorted(walked) == sorted(catalog)
    assert len(walked) == len(set(walked))


@pytest.mark.unit
def test_list_by_group_filters_and_sorts_by_title(catalog):
    page = list_by_group("Muse", None, 10)
    assert [s.title for s in page] == ["Hysteria", "Starlight", "Uprising"]
    assert {s.group_name for s in page} == {"Muse"}


@pytest.mark.unit
def test_list_by_group_resumes_after_title(catalog):
    first = list_by_group("Coldplay", None, 2)
    assert [s.title for s in first] == ["Clocks", "Fix You"]
    cursor = decode_group_cursor(encode_group_cursor(first[-1])["prevSong"])
    assert [s.title for s in list_by_group("Coldplay", cursor, 2)] == ["Yellow"]


@pytest.mark.unit
def test_list_by_unknown_group_is_empty(catalog):
    assert list_by_group("Nobody", None, 10) == []


@pytest.mark.unit
def test_exact_duplicates_are_ordered_by_id(db_session):
    first = create_song("Same", "Twin", "01.01.2001", "", "")
    second = create_song("Same", "Twin", "02.02.2002", "", "")
    assert [s.id for s in list_all(None, 10)] == [first, second]
    assert [s.id for s in list_by_group("Twin", None, 10)] == [first, second]


@pytest.mark.unit
def test_exact_duplicates_share_one_cursor_value(db_session):
    create_song("Same", "Twin", "01.01.2001", "", "")
    create_song("Same", "Twin", "02.02.2002", "", "")
    after = create_song("Zed", "Twin", "03.03.2003", "", "")
    first = list_all(None, 1)
    params = encode_cursor(first[-1])
    # value seek resumes strictly after ("Twin", "Same"), skipping its twin
    assert [s.id for s in list_all(decode_cursor(params["prevGroup"], params["prevSong"]), 5)] == [after]


@pytest.mark.unit
@pytest.mark.parametrize("limit", [0, -1])
def test_non_positive_limit_is_rejected(db_session, limit):
    with pytest.raises(ValidationError):
        list_all(None, limit)
    with pytest.raises(ValidationError):
        list_by_group("Muse", None, limit)


_names = st.text(alphabet="abcAB ", min_size=1, max_size=4).filter(lambda s: s.strip())


@pytest.mark.unit
@settings(max_examples=25, deadline=None, suppress_health_check=[HealthCheck.function_scoped_fixture])
@given(
    entries=st.lists(st.tuples(_names, _names), min_size=0, max_size=15, unique=True),
    page_size=st.integers(min_value=1, max_value=6),
)
def test_enumeration_property(db_session, entries, page_size):
    clear_catalog()
    ids = [create_song(title, group, "01.01.2001", "", "") for title, group in entries]

    seen = []
    cursor = None
    while True:
        page = list_all(cursor, page_size)
        if not page:
            break
        seen.extend(page)
        params = encode_cursor(page[-1])
        cursor = decode_cursor(params["prevGroup"], params["prevSong"])

    assert sorted(s.id for s in seen) == sorted(ids)
    assert [_order_key(s) for s in seen] == sorted(_order_key(s) for s in seen)
