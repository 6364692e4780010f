"""
Sample records and a sample quotation template.

The template has one sheet, ``Quotation``, with two named blocks:

* ``col`` (C3:D8): one supplier's offer, replicated to the right.
* ``row`` (A11:C12): one item line spanning two rows, replicated downwards.

Rows below the item block (totals, signature) move down when items are
inserted.
"""

import os
from dataclasses import dataclass

from openpyxl import Workbook
from openpyxl.comments import Comment
from openpyxl.styles import Alignment, Font, PatternFill

from .names import define_name
from .ranges import Range

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
TITLE_FONT = Font(bold=True, size=14)
NOTE_FONT = Font(italic=True, color="666666")

TEMPLATE_SHEET = "Quotation"

# name -> coordinate on the template sheet
TEMPLATE_NAMES = {
    "row": "A11:C12",
    "itemRef": "A11",
    "desc": "B11",
    "quantity": "C11",
    "col": "C3:D8",
    "unitPrice": "D4",
    "totalAmount": "D5",
    "offer": "D6",
    "sampleSubmitted": "D7",
    "remarks": "D8",
}


@dataclass
class Item:
    item_ref: str
    desc: str
    quantity: int


@dataclass
class Supplier:
    unit_price: float
    total_amount: float
    offer: str
    sample_submitted: str
    remarks: str


def make_items(num_rows):
    """Item records for the vertical block."""
    return [
        Item(
            item_ref=f"[Item Ref.:\n{i}",
            desc=f"Electrical Ceiling Fans,complete with fan {i}",
            quantity=i,
        )
        for i in range(num_rows)
    ]


def make_suppliers(num_cols):
    """Supplier records for the horizontal block."""
    return [
        Supplier(
            unit_price=i,
            total_amount=i * 3,
            offer="N" if i % 2 == 0 else "Y",
            sample_submitted="Y" if i % 2 == 0 else "N",
            remarks=f"Remarks {i}",
        )
        for i in range(num_cols)
    ]


def fill_item(rng, item):
    rng.cell("itemRef").value = item.item_ref
    rng.cell("desc").value = item.desc
    rng.cell("quantity").value = item.quantity


def fill_supplier(rng, supplier):
    rng.cell("unitPrice").value = supplier.unit_price
    rng.cell("totalAmount").value = supplier.total_amount
    rng.cell("offer").value = supplier.offer
    rng.cell("sampleSubmitted").value = supplier.sample_submitted
    rng.cell("remarks").value = supplier.remarks


def fill_item_sheet(ws, item):
    """Fill a whole cloned sheet with one item (per-record sheet mode)."""
    fill_item(Range(ws, "row"), item)
    ws["A1"] = f"Quotation - {item.item_ref.splitlines()[-1]}"


def create_sample_template(output_path):
    """Write the sample quotation template to *output_path*."""
    wb = Workbook()
    ws = wb.active
    ws.title = TEMPLATE_SHEET

    # ---- Title ----
    ws["A1"] = "Quotation Comparison"
    ws["A1"].font = TITLE_FONT
    ws.merge_cells("A1:D1")

    # ---- Supplier block (col) ----
    ws["C3"] = "Supplier"
    ws["C3"].font = HEADER_FONT
    ws["C3"].fill = HEADER_FILL
    ws["C3"].alignment = Alignment(horizontal="center")
    ws.merge_cells("C3:D3")
    labels = ["Unit Price", "Total Amount", "Offer", "Sample Submitted", "Remarks"]
    for offset, label in enumerate(labels):
        ws.cell(row=4 + offset, column=3, value=label)
    ws["D4"].number_format = "#,##0.00"
    ws["D5"].number_format = "#,##0.00"
    ws["D4"].comment = Comment("Price per unit, excluding tax", "template")

    # ---- Item block (row) ----
    for col, header in enumerate(["Item Ref.", "Description", "Quantity"], start=1):
        cell = ws.cell(row=10, column=col, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    ws["A11"].alignment = Alignment(wrap_text=True, vertical="top")
    ws.merge_cells("A11:A12")
    ws["B12"] = "Supplied and installed"
    ws["B12"].font = NOTE_FONT
    ws["C12"] = "pcs"
    ws["C11"].number_format = "0"
    ws.row_dimensions[11].height = 30
    ws.row_dimensions[12].height = 18

    # ---- Below the item block ----
    ws["A14"] = "Total"
    ws["A14"].font = HEADER_FONT
    ws["C14"] = "=SUM(C11:C12)"
    ws["A16"] = "Prepared by"

    for col, width in {"A": 18, "B": 45, "C": 18, "D": 14}.items():
        ws.column_dimensions[col].width = width

    # ---- Page setup ----
    ws.page_setup.orientation = "landscape"
    ws.page_setup.paperSize = ws.PAPERSIZE_A4
    ws.page_setup.fitToWidth = 1
    ws.print_options.horizontalCentered = True
    ws.print_title_rows = "10:10"
    ws.oddHeader.center.text = "Quotation"
    ws.oddFooter.right.text = "Page &P of &N"

    for name, coordinate in TEMPLATE_NAMES.items():
        define_name(wb, name, ws, coordinate)

    os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
    wb.save(output_path)
    wb.close()
    return output_path
