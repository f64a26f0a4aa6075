# tests/test_progress.py
from textpager.progress import (
    GlobalMarker,
    LineMap,
    PagedMarker,
    ScrollTarget,
    capture_global,
    capture_paged,
    clamp_page,
    find_line_range,
    restore_global,
    restore_paged,
)

_TEXT = "one\ntwo\nthree"


def test_line_map():
    lines = LineMap("a\nbc\n")
    assert lines.line_count == 3
    assert lines.line_of(0) == 0
    assert lines.line_of(1) == 0
    assert lines.line_of(3) == 1
    assert lines.line_of(99) == 2
    assert lines.line_range(1) == (2, 4)
    assert lines.line_range(2) == (5, 5)


def test_find_line_range():
    assert find_line_range(_TEXT, 1) == (0, 3)
    assert find_line_range(_TEXT, 3) == (8, 13)
    assert find_line_range(_TEXT, 0) is None
    assert find_line_range(_TEXT, 4) is None
    assert find_line_range("", 1) == (0, 0)


def test_capture_global_snaps_to_line_start():
    assert capture_global(_TEXT, 6) == GlobalMarker(4)
    assert capture_global(_TEXT, 4) == GlobalMarker(4)
    assert capture_global(_TEXT, -5) == GlobalMarker(0)


def test_restore_global():
    assert restore_global(_TEXT, GlobalMarker(9)) == ScrollTarget(
        page_index=None, line=2, line_start=8, offset=9
    )


def test_restore_global_clamps_stale_marker():
    target = restore_global(_TEXT, GlobalMarker(1000))
    assert target.offset == len(_TEXT)
    assert target.line == 2
    assert restore_global(_TEXT, GlobalMarker(-3)).offset == 0


def test_capture_paged():
    assert capture_paged(3, "ab\ncd", 4) == PagedMarker(3, 3)


def test_clamp_page():
    assert clamp_page(PagedMarker(10, 5), 4) == PagedMarker(3, 5)
    assert clamp_page(PagedMarker(-1, 5), 4) == PagedMarker(0, 5)
    assert clamp_page(PagedMarker(2, 5), 0) == PagedMarker(0, 5)
    marker = PagedMarker(1, 1)
    assert clamp_page(marker, 4) is marker


def test_restore_paged_clamps_page_and_offset():
    target = restore_paged(PagedMarker(10, 100), "x\ny", 4)
    assert target == ScrollTarget(page_index=3, line=1, line_start=2, offset=3)


def test_restore_paged_in_range():
    target = restore_paged(PagedMarker(1, 5), LineMap("abc\ndef\n"), 2)
    assert target.page_index == 1
    assert target.line == 1
    assert target.line_start == 4


def test_markers_round_trip_through_ints():
    assert GlobalMarker.from_ints(*GlobalMarker(7).to_ints()) == GlobalMarker(7)
    marker = PagedMarker(2, 40)
    assert PagedMarker.from_ints(*marker.to_ints()) == marker


def test_missing_stored_values_mean_zero():
    assert GlobalMarker.from_ints(None) == GlobalMarker(0)
    assert PagedMarker.from_ints(None, None) == PagedMarker(0, 0)
    assert PagedMarker.from_ints(3, None) == PagedMarker(3, 0)
