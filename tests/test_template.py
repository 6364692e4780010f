"""Tests for template loading, rendering and the sample quotation end to end."""

import io
import os
import sys
from unittest import mock

import pytest
from openpyxl import Workbook, load_workbook

# Ensure the repo root is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from tests.create_sample_workbook import create_sample_workbook
from list_to_excel.binding import bind_horizontal, bind_vertical
from list_to_excel.exceptions import ResourceLoadError, UnsupportedFormatError
from list_to_excel.samples import (
    create_sample_template,
    fill_item,
    fill_item_sheet,
    fill_supplier,
    make_items,
    make_suppliers,
)
from list_to_excel.sheets import copy_sheet
from list_to_excel.template import (
    content_disposition,
    detect_format,
    load_template,
    media_type_for,
    open_template,
    render_template,
)

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="module")
def block_path(tmp_path_factory):
    d = tmp_path_factory.mktemp("template")
    return create_sample_workbook(str(d / "block.xlsx"))


@pytest.fixture(scope="module")
def quotation_path(tmp_path_factory):
    d = tmp_path_factory.mktemp("quotation")
    return create_sample_template(str(d / "quotation.xlsx"))


def render_ranges(template, items, suppliers, insert=True):
    def fill(workbook):
        sheet = workbook.worksheets[0]
        bind_vertical(sheet, "row", 0, fill_item, items, insert=insert)
        bind_horizontal(sheet, "col", 0, fill_supplier, suppliers)

    sink = io.BytesIO()
    result = render_template(template, sink, fill)
    return result, load_workbook(io.BytesIO(sink.getvalue()))


# ---------------------------------------------------------------------------
# Formats
# ---------------------------------------------------------------------------

class TestFormats:
    def test_supported_suffixes(self):
        assert detect_format("report.xlsx") == ".xlsx"
        assert detect_format("REPORT.XLSM") == ".xlsm"

    def test_unsupported_suffix(self):
        with pytest.raises(UnsupportedFormatError) as exc:
            detect_format("report.xls")
        assert "report.xls" in str(exc.value)
        with pytest.raises(UnsupportedFormatError):
            detect_format("report")

    def test_media_types(self):
        assert media_type_for("a.xlsx") == XLSX
        assert media_type_for("a.xlsm") == "application/vnd.ms-excel.sheet.macroEnabled.12"

    def test_content_disposition(self):
        assert content_disposition("out/report.xlsx") == 'attachment; filename="report.xlsx"'


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

class TestLoad:
    def test_load(self, block_path):
        wb = load_template(block_path)
        assert wb.sheetnames == ["Data"]
        assert "row" in wb.defined_names
        wb.close()

    def test_template_dir(self, block_path):
        wb = load_template(os.path.basename(block_path),
                           template_dir=os.path.dirname(block_path))
        assert wb["Data"]["A2"].value == "name-tpl"
        wb.close()

    def test_missing_file(self, tmp_path):
        with pytest.raises(ResourceLoadError) as exc:
            load_template(str(tmp_path / "missing.xlsx"))
        assert exc.value.reason == "file not found"

    def test_suffix_checked_before_reading(self, tmp_path):
        with pytest.raises(UnsupportedFormatError):
            load_template(str(tmp_path / "missing.csv"))

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.xlsx"
        path.write_bytes(b"not a zip archive")
        with pytest.raises(ResourceLoadError):
            load_template(str(path))

    def test_open_template_closes(self, block_path):
        with mock.patch.object(Workbook, "close") as close:
            with open_template(block_path) as wb:
                assert wb["Data"]["A1"].value == "Header"
            close.assert_called_once()


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

class TestRender:
    def test_render_to_stream(self, block_path):
        sink = io.BytesIO()

        def fill(workbook):
            workbook["Data"]["A2"] = "filled"

        result = render_template(block_path, sink, fill, response_name="out.xlsx")
        assert result.filename == "out.xlsx"
        assert result.media_type == XLSX
        assert result.content_disposition == 'attachment; filename="out.xlsx"'
        assert result.size == len(sink.getvalue())
        assert load_workbook(io.BytesIO(sink.getvalue()))["Data"]["A2"].value == "filled"

    def test_render_to_path(self, block_path, tmp_path):
        out = tmp_path / "nested" / "report.xlsx"
        render_template(block_path, str(out), lambda wb: None)
        assert out.exists()

    def test_template_file_untouched(self, block_path):
        render_template(block_path, io.BytesIO(),
                        lambda wb: wb["Data"].delete_rows(1, 5))
        wb = load_workbook(block_path)
        assert wb["Data"]["A2"].value == "name-tpl"

    def test_failed_fill_writes_nothing_and_closes(self, block_path):
        sink = io.BytesIO()

        def fill(workbook):
            raise KeyError("no such sheet")

        with mock.patch.object(Workbook, "close") as close:
            with pytest.raises(KeyError):
                render_template(block_path, sink, fill)
            close.assert_called_once()
        assert sink.getvalue() == b""

    def test_failed_fill_creates_no_file(self, block_path, tmp_path):
        out = tmp_path / "report.xlsx"
        with pytest.raises(ValueError):
            render_template(block_path, str(out), lambda wb: int("x"))
        assert not out.exists()

    def test_unsupported_response_name(self, block_path):
        with pytest.raises(UnsupportedFormatError):
            render_template(block_path, io.BytesIO(), lambda wb: None,
                            response_name="report.pdf")


# ---------------------------------------------------------------------------
# Sample quotation, range mode
# ---------------------------------------------------------------------------

class TestQuotationRanges:
    @pytest.fixture(scope="class")
    def rendered(self, quotation_path):
        return render_ranges(quotation_path, make_items(3), make_suppliers(2))

    def test_items(self, rendered):
        _result, wb = rendered
        ws = wb["Quotation"]
        assert ws["A11"].value == "[Item Ref.:\n0"
        assert ws["A13"].value == "[Item Ref.:\n1"
        assert ws["A15"].value == "[Item Ref.:\n2"
        assert ws["C15"].value == 2
        assert ws["B16"].value == "Supplied and installed"

    def test_rows_below_shifted(self, rendered):
        _result, wb = rendered
        ws = wb["Quotation"]
        assert ws["A18"].value == "Total"
        # formulas are moved, not rewritten
        assert ws["C18"].value == "=SUM(C11:C12)"
        assert ws["A20"].value == "Prepared by"

    def test_item_merges_and_heights(self, rendered):
        _result, wb = rendered
        ws = wb["Quotation"]
        coords = {r.coord for r in ws.merged_cells.ranges}
        assert {"A11:A12", "A13:A14", "A15:A16"} <= coords
        assert ws.row_dimensions[13].height == 30
        assert ws.row_dimensions[16].height == 18

    def test_suppliers(self, rendered):
        _result, wb = rendered
        ws = wb["Quotation"]
        assert ws["D4"].value == 0
        assert ws["F4"].value == 1
        assert ws["F8"].value == "Remarks 1"
        assert ws["E3"].value == "Supplier"
        assert ws["F4"].number_format == "#,##0.00"
        assert ws["F4"].comment.text == "Price per unit, excluding tax"
        coords = {r.coord for r in ws.merged_cells.ranges}
        assert {"C3:D3", "E3:F3"} <= coords

    def test_result(self, rendered):
        result, _wb = rendered
        assert result.filename == "quotation.xlsx"
        assert result.media_type == XLSX


# ---------------------------------------------------------------------------
# Sample quotation, sheet mode
# ---------------------------------------------------------------------------

class TestQuotationSheets:
    def test_one_sheet_per_item(self, quotation_path):
        items = make_items(3)

        def fill(workbook):
            copy_sheet(workbook["Quotation"], fill_item_sheet, items,
                       title=lambda item, index: f"Item {index + 1}")

        sink = io.BytesIO()
        render_template(quotation_path, sink, fill)
        wb = load_workbook(io.BytesIO(sink.getvalue()))
        assert wb.sheetnames == ["Item 1", "Item 2", "Item 3"]
        assert wb["Item 2"]["A11"].value == "[Item Ref.:\n1"
        assert wb["Item 3"]["A1"].value == "Quotation - 2"
        assert wb["Item 1"].page_setup.orientation == "landscape"
