"""Tests for mathclass.range_table and the Range value type."""
import pytest

from mathclass.range_table import ClassTable, ClassTableBuilder, first_order_violation
from mathclass.types import Err, MathClass, Ok, Range, RangeOrderError


class TestRange:
    def test_single_point(self) -> None:
        r = Range(0x2B, 0x2B)
        assert r.contains(0x2B)
        assert not r.contains(0x2C)
        assert str(r) == "002B"

    def test_str_range(self) -> None:
        assert str(Range(0x1D538, 0x1D539)) == "1D538..1D539"

    def test_rejects_reversed(self) -> None:
        with pytest.raises(ValueError, match="must be >= lo"):
            Range(0x39, 0x30)

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            Range(-1, 5)

    def test_rejects_beyond_unicode(self) -> None:
        with pytest.raises(ValueError):
            Range(0x10FFFF, 0x110000)

    def test_width(self) -> None:
        assert Range(0, 0xFFFF).is_r16
        assert not Range(0x10000, 0x10000).is_r16
        assert not Range(0xFF00, 0x10010).is_r16

    def test_overlaps(self) -> None:
        assert Range(1, 5).overlaps(Range(5, 9))
        assert not Range(1, 5).overlaps(Range(6, 9))


class TestFirstOrderViolation:
    def test_sorted(self) -> None:
        assert first_order_violation([Range(1, 2), Range(3, 4), Range(10, 10)]) is None

    def test_adjacent_is_fine(self) -> None:
        assert first_order_violation([Range(1, 2), Range(3, 3)]) is None

    def test_overlap(self) -> None:
        assert first_order_violation([Range(1, 5), Range(5, 6)]) == (Range(1, 5), Range(5, 6))

    def test_descending(self) -> None:
        assert first_order_violation([Range(10, 12), Range(1, 2)]) == (Range(10, 12), Range(1, 2))


class TestClassTable:
    def test_find_r16_and_r32(self) -> None:
        table = ClassTable(
            MathClass.ALPHABETIC,
            r16=(Range(0x41, 0x5A), Range(0x61, 0x7A)),
            r32=(Range(0x1D400, 0x1D454),),
        )
        assert table.find(0x41) == Range(0x41, 0x5A)
        assert table.find(0x7A) == Range(0x61, 0x7A)
        assert table.find(0x1D400) == Range(0x1D400, 0x1D454)
        assert table.find(0x60) is None
        assert table.find(0x40) is None
        assert table.find(0x1D455) is None
        assert 0x62 in table
        assert len(table) == 3
        assert table.code_point_count == 26 + 26 + 0x55

    def test_empty_table(self) -> None:
        table = ClassTable(MathClass.SPECIAL)
        assert table.find(0) is None
        assert table.find(0x10FFFF) is None
        assert len(table) == 0

    def test_straddling_range_found_from_both_sides(self) -> None:
        table = ClassTable(MathClass.NORMAL, r16=(Range(0x30, 0x39),), r32=(Range(0xFFF0, 0x10010),))
        assert table.find(0xFFF0) == Range(0xFFF0, 0x10010)
        assert table.find(0xFFFF) == Range(0xFFF0, 0x10010)
        assert table.find(0x10000) == Range(0xFFF0, 0x10010)
        assert table.find(0x10010) == Range(0xFFF0, 0x10010)
        assert table.find(0x10011) is None

    def test_rejects_wide_range_in_r16(self) -> None:
        with pytest.raises(ValueError, match="does not fit in r16"):
            ClassTable(MathClass.NORMAL, r16=(Range(0xFFF0, 0x10010),))

    def test_rejects_narrow_range_in_r32(self) -> None:
        with pytest.raises(ValueError, match="belongs in r16"):
            ClassTable(MathClass.NORMAL, r32=(Range(0x30, 0x39),))

    def test_rejects_unsorted(self) -> None:
        with pytest.raises(ValueError):
            ClassTable(MathClass.NORMAL, r16=(Range(0x40, 0x41), Range(0x30, 0x39)))

    def test_rejects_overlap_across_widths(self) -> None:
        with pytest.raises(ValueError):
            ClassTable(MathClass.NORMAL, r16=(Range(0xFFF5, 0xFFF8),), r32=(Range(0xFFF0, 0x10010),))


class TestClassTableBuilder:
    def test_width_selection(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.ALPHABETIC, Range(0x41, 0x5A))
        builder.add(MathClass.ALPHABETIC, Range(0xFFF0, 0x10010))
        builder.add(MathClass.ALPHABETIC, Range(0x1D538, 0x1D539))
        result = builder.freeze()
        assert isinstance(result, Ok)
        table = result.value[MathClass.ALPHABETIC]
        assert table.r16 == (Range(0x41, 0x5A),)
        assert table.r32 == (Range(0xFFF0, 0x10010), Range(0x1D538, 0x1D539))

    def test_upper_bound_of_r16(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.SPACE, Range(0xFFFF, 0xFFFF))
        builder.add(MathClass.SPACE, Range(0x10000, 0x10000))
        tables = builder.freeze()
        assert isinstance(tables, Ok)
        assert tables.value[MathClass.SPACE].r16 == (Range(0xFFFF, 0xFFFF),)
        assert tables.value[MathClass.SPACE].r32 == (Range(0x10000, 0x10000),)

    def test_freeze_yields_all_classes_in_order(self) -> None:
        result = ClassTableBuilder().freeze()
        assert isinstance(result, Ok)
        assert list(result.value) == list(MathClass)
        assert all(len(t) == 0 for t in result.value.values())

    def test_no_merging(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.NORMAL, Range(0x30, 0x34))
        builder.add(MathClass.NORMAL, Range(0x35, 0x39))
        result = builder.freeze()
        assert isinstance(result, Ok)
        assert result.value[MathClass.NORMAL].r16 == (Range(0x30, 0x34), Range(0x35, 0x39))

    def test_validate_rejects_out_of_order(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.NORMAL, Range(0x40, 0x40))
        builder.add(MathClass.NORMAL, Range(0x30, 0x39))
        result = builder.freeze()
        assert result == Err(RangeOrderError(MathClass.NORMAL, Range(0x40, 0x40), Range(0x30, 0x39)))
        assert "Normal" in result.error.message

    def test_validate_checks_across_widths(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.LARGE, Range(0x1EEF0, 0x1EEF1))
        builder.add(MathClass.LARGE, Range(0x2211, 0x2211))
        result = builder.freeze()
        assert isinstance(result, Err)
        assert result.error.label is MathClass.LARGE

    def test_sort_restores_order(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.NORMAL, Range(0x1D7CE, 0x1D7FF))
        builder.add(MathClass.NORMAL, Range(0x40, 0x40))
        builder.add(MathClass.NORMAL, Range(0x30, 0x39))
        result = builder.freeze(ordering="sort")
        assert isinstance(result, Ok)
        table = result.value[MathClass.NORMAL]
        assert table.r16 == (Range(0x30, 0x39), Range(0x40, 0x40))
        assert table.r32 == (Range(0x1D7CE, 0x1D7FF),)

    def test_sort_still_rejects_overlap(self) -> None:
        builder = ClassTableBuilder()
        builder.add(MathClass.NORMAL, Range(0x35, 0x40))
        builder.add(MathClass.NORMAL, Range(0x30, 0x39))
        result = builder.freeze(ordering="sort")
        assert result == Err(RangeOrderError(MathClass.NORMAL, Range(0x30, 0x39), Range(0x35, 0x40)))

    def test_unknown_ordering(self) -> None:
        with pytest.raises(ValueError, match="unknown ordering"):
            ClassTableBuilder().freeze(ordering="merge")  # type: ignore[arg-type]
