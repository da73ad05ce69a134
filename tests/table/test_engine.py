"""
Unit tests for the table layout engine.

Geometry in these tests comes from RecordingSurface's fixed metrics:
10pt font -> 6-unit characters, 12-unit lines, so a single-line row
with default spacing is 12 + 5 = 17 units tall.
"""

import logging

import pytest

from invoice_toolkit.table import (
    InvalidTableShape,
    LayoutOptions,
    OverflowPolicy,
    RecordingSurface,
    RowOverflowError,
    SurfaceUnavailable,
    Table,
    TableLayoutError,
    layout_table,
)


def _texts(surface, page=None):
    return [c for c in surface.commands_of("text") if page is None or c.page == page]


def _lines_text(count: int) -> str:
    """Cell text that wraps to exactly `count` lines."""
    return "\n".join(["w"] * count)


class TestColumnGeometry:
    """Column placement follows usable_width / header count."""

    def test_when_two_columns_in_200_units_then_container_100_width_85(self, recording_surface, two_column_table):
        # Act
        layout_table(recording_surface, two_column_table, LayoutOptions(usable_width=200))

        # Assert
        header_a, header_b = _texts(recording_surface)[:2]
        assert header_a.args == ("A", 72, 72, 85.0, "left")
        assert header_b.args == ("B", 172.0, 72, 85.0, "left")

    @pytest.mark.parametrize("row_count", [0, 1, 25])
    def test_container_width_when_row_count_varies_then_unchanged(self, row_count):
        # Arrange
        surface = RecordingSurface()
        table = Table(("A", "B", "C", "D"), [("1", "2", "3", "4")] * row_count)

        # Act
        layout_table(surface, table, LayoutOptions(usable_width=400))

        # Assert
        xs = [c.args[1] for c in _texts(surface)[:4]]
        assert [x - xs[0] for x in xs] == [0, 100.0, 200.0, 300.0]

    def test_when_usable_width_omitted_then_page_width_minus_margins(self, recording_surface, two_column_table):
        # Letter: 612 - 72 - 72 = 468 -> containers of 234
        layout_table(recording_surface, two_column_table)

        header_b = _texts(recording_surface)[1]
        assert header_b.args[1] == 72 + 234.0
        assert header_b.args[3] == 234.0 - 15

    def test_when_spacing_leaves_no_room_then_raises(self, recording_surface, two_column_table):
        with pytest.raises(TableLayoutError, match="leaves no room"):
            layout_table(recording_surface, two_column_table, LayoutOptions(usable_width=20))


class TestSingleRowScenario:
    """Headers A/B, one row x/y, usable width 200, default spacing."""

    def test_header_rule_then_row_positions(self, recording_surface, two_column_table):
        # Act
        layout_table(recording_surface, two_column_table, LayoutOptions(usable_width=200))

        # Assert
        ops = [c.op for c in recording_surface.commands]
        assert ops == ["text", "text", "line", "text", "text", "line"]

        header_rule, row_rule = recording_surface.commands_of("line")
        # Header bottom = 72 + 17 = 89, rule half a row spacing above it
        assert header_rule.args == (72, 86.5, 272.0, 86.5, 2.0)
        assert header_rule.opacity == 1.0

        row_x = _texts(recording_surface)[2]
        # Row starts at header bottom + row spacing
        assert row_x.args[2] == 89 + 5

        # Row bottom = 94 + 17 = 111
        assert row_rule.args == (72, 108.5, 272.0, 108.5, 1.0)
        assert row_rule.opacity == 0.7

    def test_when_done_then_cursor_one_line_below_table(self, recording_surface, two_column_table):
        layout_table(recording_surface, two_column_table, LayoutOptions(usable_width=200))

        cursor = recording_surface.current_cursor()
        assert cursor.x == 72
        assert cursor.y == 111 + 12

    def test_returns_same_surface_for_chaining(self, recording_surface, two_column_table):
        assert layout_table(recording_surface, two_column_table) is recording_surface

    def test_when_start_given_then_overrides_cursor(self, recording_surface, two_column_table):
        layout_table(recording_surface, two_column_table, LayoutOptions(usable_width=200, start_x=10, start_y=150))

        header_a = _texts(recording_surface)[0]
        assert header_a.args[1:3] == (10, 150)
        assert recording_surface.current_cursor().x == 10


class TestEmptyTable:
    """Header-only tables."""

    def test_when_no_rows_then_header_and_single_rule(self, recording_surface):
        # Arrange
        table = Table(headers=("A", "B"), rows=())

        # Act
        layout_table(recording_surface, table)

        # Assert
        assert len(recording_surface.commands_of("text")) == 2
        assert len(recording_surface.commands_of("line")) == 1
        assert recording_surface.commands_of("page") == []

    def test_when_no_headers_then_raises_invalid_shape(self, recording_surface):
        with pytest.raises(InvalidTableShape):
            layout_table(recording_surface, {"headers": [], "rows": []})


class TestPageBreaks:
    """Break decisions on a 200-unit page with 20-unit margins (bottom at 180)."""

    def test_when_row_needs_three_heights_beyond_bottom_then_breaks_before_row(self, small_page_surface):
        # Arrange
        # 14 chars fit in an 85-unit column: this wraps to 3 lines -> 41 units
        table = Table(("A", "B"), [("aaaa bbbb cccc dddd eeee ffff gggg", "y")])
        options = LayoutOptions(usable_width=200, start_x=20, start_y=100)

        # Act
        layout_table(small_page_surface, table, options)

        # Assert
        ops = [c.op for c in small_page_surface.commands]
        assert ops == ["text", "text", "line", "page", "text", "text", "line"]

        row_cells = _texts(small_page_surface, page=1)
        assert [c.args[2] for c in row_cells] == [20, 20]
        assert small_page_surface.page_count == 2

    def test_when_header_lacks_room_then_page_allocated_before_header(self, small_page_surface, two_column_table):
        # 140 + 3 * 17 = 191 > 180
        layout_table(small_page_surface, two_column_table, LayoutOptions(start_y=140))

        ops = [c.op for c in small_page_surface.commands]
        assert ops[0] == "page"
        assert ops.count("page") == 1
        header_a = _texts(small_page_surface)[0]
        assert header_a.page == 1
        assert header_a.args[2] == 20

    def test_header_is_never_followed_by_immediate_break(self, small_page_surface):
        """Three header heights of room means a header-sized row always fits next."""
        for start_y in range(20, 180, 7):
            surface = type(small_page_surface)(small_page_surface.page_metrics())
            table = Table(("A", "B"), [("x", "y")])

            layout_table(surface, table, LayoutOptions(start_y=start_y))

            ops = [c.op for c in surface.commands]
            header_rule = ops.index("line")
            assert "page" not in ops[header_rule:], f"break after header at start_y={start_y}"

    def test_break_decision_is_monotonic_in_row_height(self, small_page_surface):
        # Arrange
        breaks = []
        for line_count in range(1, 11):
            surface = type(small_page_surface)(small_page_surface.page_metrics())
            table = Table(("A", "B"), [(_lines_text(line_count), "y")])

            # Act
            layout_table(surface, table, LayoutOptions(start_y=100))
            breaks.append(bool(surface.commands_of("page")))

        # Assert
        # 100 + 3 * (12n + 5) < 180 only holds for n = 1
        assert breaks == [False] + [True] * 9

    def test_when_rows_fill_page_then_continue_at_top_margin(self, small_page_surface):
        # Rows are drawn at 42, 64, 86, 108, 130; checked from y=130, 130 + 51 < 180 fails for the sixth
        table = Table(("A", "B"), [(str(i), "y") for i in range(6)])

        layout_table(small_page_surface, table)

        first_page = _texts(small_page_surface, page=0)
        second_page = _texts(small_page_surface, page=1)
        assert len(first_page) == 2 + 5 * 2
        assert [c.args[0] for c in second_page] == ["5", "y"]
        assert second_page[0].args[2] == 20

    def test_when_repeat_header_then_header_redrawn_on_continuation(self, small_page_surface):
        # Arrange
        table = Table(("A", "B"), [(str(i), "y") for i in range(6)])

        # Act
        layout_table(small_page_surface, table, LayoutOptions(repeat_header=True))

        # Assert
        second_page = _texts(small_page_surface, page=1)
        assert [c.args[0] for c in second_page] == ["A", "B", "5", "y"]
        # Header at 20, bottom 37, row below it at 37 + 5
        assert second_page[2].args[2] == 42
        header_rules = [c for c in small_page_surface.commands_of("line") if c.args[4] == 2.0]
        assert len(header_rules) == 2

    def test_when_headers_not_repeated_then_continuation_has_rows_only(self, small_page_surface):
        table = Table(("A", "B"), [(str(i), "y") for i in range(6)])

        layout_table(small_page_surface, table)

        assert "A" not in [c.args[0] for c in _texts(small_page_surface, page=1)]


class TestOversizedRows:
    """Rows taller than an empty page (capacity 160 on the small page)."""

    def test_when_policy_raise_then_raises_before_drawing(self, small_page_surface):
        # Arrange
        # 14 lines -> 173 units
        table = Table(("A", "B"), [(_lines_text(14), "y")])

        # Act & Assert
        with pytest.raises(RowOverflowError) as excinfo:
            layout_table(small_page_surface, table, LayoutOptions(overflow=OverflowPolicy.RAISE))

        assert excinfo.value.row_index == 0
        assert len(_texts(small_page_surface)) == 2  # header only
        assert small_page_surface.page_listeners == ()

    def test_when_policy_draw_then_one_page_per_row_and_warning(self, small_page_surface, caplog):
        # Arrange
        table = Table(("A", "B"), [(_lines_text(14), str(i)) for i in range(3)])

        # Act
        with caplog.at_level(logging.WARNING):
            layout_table(small_page_surface, table)

        # Assert
        assert len(small_page_surface.commands_of("page")) == 3
        assert "overflows page" in caplog.text


class TestSurfaceContract:
    """Interaction with the drawing surface."""

    def test_when_surface_missing_then_raises(self, two_column_table):
        with pytest.raises(SurfaceUnavailable):
            layout_table(None, two_column_table)

    def test_when_surface_not_drawing_surface_then_raises(self, two_column_table):
        with pytest.raises(SurfaceUnavailable, match="not a DrawingSurface"):
            layout_table(object(), two_column_table)

    def test_when_table_mapping_then_accepted(self, recording_surface):
        layout_table(recording_surface, {"headers": ["A"], "rows": [["x"], [None]]})

        assert [c.args[0] for c in _texts(recording_surface)] == ["A", "x", ""]

    def test_when_mapping_ragged_then_raises_invalid_shape(self, recording_surface):
        with pytest.raises(InvalidTableShape):
            layout_table(recording_surface, {"headers": ["A", "B"], "rows": [["x"]]})

    def test_listener_removed_after_layout(self, small_page_surface):
        table = Table(("A", "B"), [(str(i), "y") for i in range(6)])

        layout_table(small_page_surface, table)

        assert small_page_surface.page_listeners == ()

    def test_opacity_restored_after_every_row_rule(self, small_page_surface):
        # Arrange
        table = Table(("A", "B"), [(str(i), "y") for i in range(12)])

        # Act
        layout_table(small_page_surface, table)

        # Assert
        assert all(c.opacity == 1.0 for c in small_page_surface.commands if c.op != "line")
        assert small_page_surface.opacity == 1.0

    def test_same_input_on_fresh_surfaces_gives_identical_commands(self, small_page_surface):
        # Arrange
        metrics = small_page_surface.page_metrics()
        table = Table(
            ("Item", "Notes"),
            [(f"item {i}", "some longer note " * (i % 4)) for i in range(15)],
        )
        first, second = RecordingSurface(metrics), RecordingSurface(metrics)

        # Act
        layout_table(first, table)
        layout_table(second, table)

        # Assert
        assert first.commands == second.commands
        assert first.commands_of("page")


class TestStyleHooks:
    """prepare_header / prepare_row hooks."""

    def test_header_hook_runs_before_header_measurement(self, recording_surface, two_column_table):
        # Arrange
        options = LayoutOptions(prepare_header=lambda: recording_surface.set_font("Courier-Bold", 20))

        # Act
        layout_table(recording_surface, two_column_table, options)

        # Assert
        assert recording_surface.commands[0].op == "font"
        # 20pt header: 24-unit line + 5 spacing, rule 2.5 above 72 + 29
        header_rule = recording_surface.commands_of("line")[0]
        assert header_rule.args[1] == 72 + 29 - 2.5

    def test_row_hook_called_with_row_and_index_in_order(self, recording_surface):
        # Arrange
        calls = []
        table = Table(("A",), [("r0",), ("r1",), ("r2",)])
        options = LayoutOptions(prepare_row=lambda row, index: calls.append((row, index)))

        # Act
        layout_table(recording_surface, table, options)

        # Assert
        assert calls == [(("r0",), 0), (("r1",), 1), (("r2",), 2)]
