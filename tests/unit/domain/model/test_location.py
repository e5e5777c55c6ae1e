"""Tests for domain/model/location.py."""

from pathlib import Path

import pytest

from modelcheck.domain.model.location import Location


class TestLocationCreation:
    """Tests for valid Location creation."""

    def test_minimal_valid(self) -> None:
        loc = Location(file=Path("invoice.rb"), line=1)
        assert loc.file == Path("invoice.rb")
        assert loc.line == 1
        assert loc.column == 0

    def test_is_frozen(self) -> None:
        loc = Location(file=Path("invoice.rb"), line=1)
        with pytest.raises(AttributeError):
            loc.line = 2  # type: ignore[misc]

    def test_str_format(self) -> None:
        loc = Location(file=Path("app/invoice.rb"), line=12, column=4)
        assert str(loc) == "app/invoice.rb:12:4"


class TestLocationFailFirst:
    """Tests for FAIL-FIRST validation in Location."""

    def test_line_zero_raises(self) -> None:
        with pytest.raises(ValueError, match="line must be > 0"):
            Location(file=Path("invoice.rb"), line=0)

    def test_column_negative_raises(self) -> None:
        with pytest.raises(ValueError, match="column must be >= 0"):
            Location(file=Path("invoice.rb"), line=1, column=-1)

    def test_file_none_raises(self) -> None:
        with pytest.raises(TypeError, match="file"):
            Location(file=None, line=1)  # type: ignore[arg-type]


class TestLocationOrdering:
    """Locations sort by file, then line, then column."""

    def test_sorts_by_file_first(self) -> None:
        a = Location(file=Path("a.rb"), line=50)
        b = Location(file=Path("b.rb"), line=1)
        assert sorted([b, a]) == [a, b]

    def test_at_line_resets_column(self) -> None:
        loc = Location(file=Path("a.rb"), line=3, column=7).at_line(9)
        assert loc == Location(file=Path("a.rb"), line=9, column=0)
