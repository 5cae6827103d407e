"""Tests for ordinal widths and entry placement."""

import pytest

from tocpack.reorder.archive import Entry
from tocpack.reorder.navigation import VisitRecord
from tocpack.reorder.placement import (
    digit_width,
    format_ordinal,
    resolve_placements,
    rewrite_headings,
)


def _records(count: int) -> list[VisitRecord]:
    return [
        VisitRecord(f"text/ch{i}.html", f"text/{{ordinal}}-Chapter {i}.html")
        for i in range(count)
    ]


class TestDigitWidth:
    """Tests for digit_width."""

    @pytest.mark.parametrize(
        ("count", "width"),
        [(0, 1), (1, 1), (9, 1), (10, 2), (99, 2), (100, 3), (12345, 5)],
    )
    def test_width(self, count, width):
        assert digit_width(count) == width

    def test_bounds(self):
        """10^(w-1) <= n <= 10^w - 1 for every positive n."""
        for count in range(1, 2000):
            width = digit_width(count)
            assert 10 ** (width - 1) <= count <= 10**width - 1

    def test_format_ordinal(self):
        assert format_ordinal(3, 2) == "03"
        assert format_ordinal(3, 1) == "3"


class TestResolvePlacements:
    """Tests for resolve_placements."""

    def test_single_record(self):
        """One record gives width 1 and ordinal 0."""
        records = [VisitRecord("OEBPS/text/ch1.html", "OEBPS/text/{ordinal}-Chapter 1.html")]
        entry = Entry("OEBPS/text/ch1.html", b"<html/>")
        [placement] = resolve_placements([entry], records)
        assert placement.dest_path == "OEBPS/text/0-Chapter 1.html"
        assert placement.ordinal == 0
        assert placement.content == b"<html/>"

    def test_width_two_for_ten_records(self):
        records = _records(12)
        [placement] = resolve_placements([Entry("text/ch3.html", b"")], records)
        assert placement.dest_path == "text/03-Chapter 3.html"

    def test_passthrough(self):
        """Entries the TOC does not mention keep their name and bytes."""
        css = Entry("OEBPS/styles/book.css", b"body {}")
        [placement] = resolve_placements([css], _records(2))
        assert placement.is_passthrough
        assert placement.dest_path == "OEBPS/styles/book.css"
        assert placement.content == b"body {}"

    def test_order_follows_entries(self):
        entries = [Entry("text/ch1.html", b"1"), Entry("a.css", b""), Entry("text/ch0.html", b"0")]
        placements = resolve_placements(entries, _records(2))
        assert [p.entry.name for p in placements] == ["text/ch1.html", "a.css", "text/ch0.html"]
        assert [p.ordinal for p in placements] == [1, None, 0]

    def test_reprocessing_renamed_entries_is_passthrough(self):
        """Already ordinal-named entries no longer match and pass through unchanged."""
        records = _records(3)
        first = resolve_placements([Entry(r.src, b"x") for r in records], records)
        renamed = [Entry(p.dest_path, p.content) for p in first]
        second = resolve_placements(renamed, records)
        assert all(p.is_passthrough for p in second)
        assert [p.dest_path for p in second] == [p.dest_path for p in first]

    def test_placeholder_replaced_once(self):
        record = VisitRecord("ch.html", "./{ordinal}-{ordinal}.html")
        [placement] = resolve_placements([Entry("ch.html", b"")], [record])
        assert placement.dest_path == "./0-{ordinal}.html"


def test_rewrite_headings_is_identity():
    content = b"<h1>Title</h1>"
    assert rewrite_headings(content) == content
