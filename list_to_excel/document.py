"""
Document model helpers.

openpyxl is the in-memory document model: workbooks, worksheets, cells,
merged ranges and page setup are openpyxl objects. This module adds the
few row/cell operations the replicators need that openpyxl does not expose
directly: fresh cell creation, row existence, row shifting that carries row
heights and merged ranges along, and the closed set of cell kinds.

All row and column indexes are 1-based, as in openpyxl.
"""

import logging
from enum import Enum

from openpyxl.cell.cell import Cell
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.cell_range import CellRange

logger = logging.getLogger(__name__)


class CellType(Enum):
    """Kinds of cell content the replicator knows how to copy."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    FORMULA = "formula"
    ERROR = "error"
    EMPTY = "empty"


# openpyxl data_type codes -> CellType ('n' and 'd' are both numeric)
_DATA_TYPES = {
    "s": CellType.STRING,
    "inlineStr": CellType.STRING,
    "str": CellType.STRING,
    "b": CellType.BOOLEAN,
    "f": CellType.FORMULA,
    "e": CellType.ERROR,
    "n": CellType.NUMBER,
    "d": CellType.NUMBER,
}


def cell_type(cell):
    """Return the :class:`CellType` of an openpyxl cell."""
    if cell.value is None:
        return CellType.EMPTY
    return _DATA_TYPES.get(cell.data_type, CellType.STRING)


def create_cell(ws, row, column):
    """Create a new, empty cell at (row, column), replacing whatever was there.

    Unlike ``ws.cell()`` this never hands back an existing cell, so a merged
    placeholder or a previously filled cell at the destination is discarded.
    """
    cell = Cell(ws, row=row, column=column)
    ws._add_cell(cell)
    return cell


def peek_cell(ws, row, column):
    """Return the cell at (row, column) without adding one to *ws*.

    Where the sheet has no cell, a detached empty cell stands in for it.
    """
    cell = ws._cells.get((row, column))
    if cell is None:
        cell = Cell(ws, row=row, column=column)
    return cell


def existing_rows(ws):
    """Return the set of row indexes that hold a cell or a row-dimension record."""
    rows = {row for row, _col in ws._cells}
    rows.update(ws.row_dimensions.keys())
    return rows


def last_row(ws):
    """Index of the last existing row, 0 for an empty sheet."""
    rows = existing_rows(ws)
    return max(rows) if rows else 0


def row_height(ws, idx):
    """Height of row *idx*, or None when the row uses the default height.

    Reading never creates a row-dimension record.
    """
    dim = ws.row_dimensions.get(idx)
    if dim is None:
        return None
    return dim.height


def set_row_height(ws, idx, height):
    if height is not None:
        ws.row_dimensions[idx].height = height


def shift_rows(ws, start, end, amount):
    """Move rows *start*..*end* (inclusive) down by *amount* rows.

    Cells, row heights and merged ranges lying entirely within the moved rows
    travel together. Rows vacated at the top of the span are left empty;
    anything already sitting in the *amount* rows below *end* is overwritten.
    Formulas are not rewritten.
    """
    if amount <= 0 or end < start:
        return

    max_col = max(ws.max_column, 1)
    ws.move_range(
        CellRange(min_col=1, min_row=start, max_col=max_col, max_row=end),
        rows=amount,
    )

    # Hyperlinks carry their own anchor coordinate
    for row in ws.iter_rows(min_row=start + amount, max_row=end + amount,
                            max_col=max_col):
        for cell in row:
            if cell.hyperlink is not None:
                cell.hyperlink.ref = cell.coordinate

    # Row heights, bottom-up so nothing is overwritten before it moves
    for idx in sorted((r for r in ws.row_dimensions if start <= r <= end),
                      reverse=True):
        dim = ws.row_dimensions.pop(idx)
        dim.index = idx + amount
        ws.row_dimensions[idx + amount] = dim

    # Merged ranges fully inside the moved rows
    moved = [mcr for mcr in ws.merged_cells.ranges
             if start <= mcr.min_row and mcr.max_row <= end]
    for mcr in moved:
        ws.merged_cells.remove(mcr)
        mcr.shift(row_shift=amount)
        ws.merged_cells.add(mcr)

    logger.debug(f"Shifted rows {start}-{end} of '{ws.title}' down by {amount} "
                 f"({len(moved)} merged ranges moved)")


def add_merged_region(ws, min_row, max_row, min_col, max_col):
    """Merge the given rectangle on *ws*."""
    ws.merge_cells(
        start_row=min_row, start_column=min_col,
        end_row=max_row, end_column=max_col,
    )


def region_coordinate(min_row, max_row, min_col, max_col):
    """A1-style coordinate of a rectangle, e.g. ``"B2:D3"``."""
    return (f"{get_column_letter(min_col)}{min_row}:"
            f"{get_column_letter(max_col)}{max_row}")
