"""Tests for named range resolution and Range handles."""

import os
import sys

import pytest
from openpyxl import Workbook
from openpyxl.workbook.defined_name import DefinedName

# Ensure the repo root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.create_sample_workbook import create_block_workbook
from list_to_excel.exceptions import UnresolvedNameError
from list_to_excel.names import (
    AreaReference,
    define_name,
    find_definition,
    resolve_area,
    resolve_cell,
)
from list_to_excel.ranges import Range


@pytest.fixture
def block():
    return create_block_workbook()


# ---------------------------------------------------------------------------
# Area resolution
# ---------------------------------------------------------------------------

class TestResolveArea:
    def test_workbook_name(self, block):
        wb, ws = block
        area = resolve_area(wb, "row", ws)
        assert area == AreaReference("Data", 2, 1, 3, 3)
        assert area.row_count == 2
        assert area.col_count == 3
        assert area.coordinate == "A2:C3"

    def test_single_cell_name(self, block):
        wb, ws = block
        area = resolve_area(wb, "amount")
        assert (area.first_row, area.first_col) == (2, 2)
        assert area.row_count == 1 and area.col_count == 1

    def test_cells_iterates_row_by_row(self, block):
        wb, ws = block
        cells = list(resolve_area(wb, "row").cells())
        assert cells[:3] == [(2, 1), (2, 2), (2, 3)]
        assert cells[-1] == (3, 3)
        assert len(cells) == 6

    def test_sheet_local_name_wins(self, block):
        wb, ws = block
        define_name(wb, "row", ws, "A5:B6", local=True)
        assert resolve_area(wb, "row", ws).coordinate == "A5:B6"
        # without a sheet only the workbook scope is searched
        assert resolve_area(wb, "row").coordinate == "A2:C3"

    def test_quoted_sheet_title(self):
        wb = Workbook()
        ws = wb.active
        ws.title = "My Items"
        define_name(wb, "block", ws, "B2:D4")
        area = resolve_area(wb, "block")
        assert area.sheet_title == "My Items"
        assert area.coordinate == "B2:D4"

    def test_undefined_name(self, block):
        wb, ws = block
        with pytest.raises(UnresolvedNameError) as exc:
            resolve_area(wb, "missing", ws)
        assert exc.value.name == "missing"

    def test_constant_name(self, block):
        wb, ws = block
        wb.defined_names["rate"] = DefinedName("rate", attr_text="0.5")
        with pytest.raises(UnresolvedNameError):
            resolve_area(wb, "rate")

    def test_broken_reference(self, block):
        wb, ws = block
        wb.defined_names["broken"] = DefinedName("broken", attr_text="#REF!")
        with pytest.raises(UnresolvedNameError):
            resolve_area(wb, "broken")

    def test_multi_area_name(self, block):
        wb, ws = block
        wb.defined_names["split"] = DefinedName(
            "split", attr_text="Data!$A$1:$A$2,Data!$C$1:$C$2")
        with pytest.raises(UnresolvedNameError) as exc:
            resolve_area(wb, "split")
        assert "2 areas" in str(exc.value)

    def test_resolution_does_not_touch_workbook(self, block):
        wb, ws = block
        before = sorted(wb.defined_names)
        resolve_area(wb, "row", ws)
        assert sorted(wb.defined_names) == before
        assert find_definition(wb, "row", ws) is wb.defined_names["row"]


# ---------------------------------------------------------------------------
# Cell resolution
# ---------------------------------------------------------------------------

class TestResolveCell:
    def test_defined_name_gives_top_left(self, block):
        wb, ws = block
        assert resolve_cell(wb, "row") == (2, 1)
        assert resolve_cell(wb, "amount") == (2, 2)

    def test_literal_reference(self, block):
        wb, ws = block
        assert resolve_cell(wb, "B7") == (7, 2)
        assert resolve_cell(wb, "$C$4") == (4, 3)

    def test_unknown_name(self, block):
        wb, ws = block
        with pytest.raises(UnresolvedNameError):
            resolve_cell(wb, "not_a_name")


# ---------------------------------------------------------------------------
# Range handles
# ---------------------------------------------------------------------------

class TestRange:
    def test_cell_applies_shifts(self, block):
        wb, ws = block
        rng = Range(ws, "row", shift_y=4, shift_x=1)
        assert rng.cell("amount").coordinate == "C6"
        assert rng.coordinate == "B6:D7"

    def test_area_is_cached_per_handle(self, block):
        wb, ws = block
        rng = Range(ws, "row")
        assert rng.area.coordinate == "A2:C3"
        define_name(wb, "row", ws, "A8:C8")
        assert rng.area.coordinate == "A2:C3"
        assert Range(ws, "row").area.coordinate == "A8:C8"

    def test_derive_keeps_area_and_scope(self, block):
        wb, ws = block
        define_name(wb, "row", ws, "A5:B6", local=True)
        rng = Range(ws, "row")
        other = wb.create_sheet("Other")
        clone = rng.derive(other, 3, 0)
        assert clone.sheet is other
        assert clone.area.coordinate == "A5:B6"
        assert clone.shift_y == 3
        assert clone.index == 0
        assert rng.shift_y == 0

    def test_unresolved_name_raises_on_use(self, block):
        wb, ws = block
        rng = Range(ws, "nope")
        with pytest.raises(UnresolvedNameError):
            rng.area

    def test_repr(self, block):
        wb, ws = block
        assert repr(Range(ws, "row", 2)) == \
            "Range(sheet='Data', name='row', shift_y=2, shift_x=0)"
