"""
Cell-level copy: value, type, style, comment and hyperlink.
"""

from copy import copy

from .document import CellType, cell_type


def _set_text(cell, text):
    # Assigning a str starting with '=' would make openpyxl store a formula
    cell.value = text
    cell.data_type = "s"


def _formula_text(value):
    # ArrayFormula / DataTableFormula keep the expression in .text
    text = getattr(value, "text", value)
    return "" if text is None else str(text)


def copy_cell(src, dst):
    """Copy style and content from *src* to *dst*.

    The value is copied according to the source's cell type:

    * STRING, NUMBER, BOOLEAN: the value itself (rich text included).
    * FORMULA: the formula expression is written as literal text; the
      destination is not a formula cell and nothing is recalculated.
    * ERROR: the source's text (the error code) is written as literal text.
    * EMPTY: nothing.

    The style is shared: the destination points at the same entries of the
    workbook's style tables as the source. Comment and hyperlink are copied
    only when the source has one. Only *dst* is modified.
    """
    kind = cell_type(src)

    if kind is CellType.STRING:
        _set_text(dst, src.value)
    elif kind is CellType.BOOLEAN:
        dst.value = bool(src.value)
    elif kind is CellType.NUMBER:
        dst.value = src.value
    elif kind is CellType.FORMULA:
        _set_text(dst, _formula_text(src.value))
    elif kind is CellType.ERROR:
        _set_text(dst, str(src.value))

    dst._style = copy(src._style)
    if src.comment is not None:
        dst.comment = src.comment
    if src.hyperlink is not None:
        dst.hyperlink = copy(src.hyperlink)
        if kind is CellType.EMPTY:
            # openpyxl fills an empty cell with the link target
            dst.value = None
