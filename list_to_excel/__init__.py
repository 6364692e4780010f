"""List-to-Excel: fill spreadsheet templates with lists of records.

Given a template workbook with a named block of rows or columns and a list
of records, produces either:

  * **Range mode** – the same sheet with the block replicated once per
    record (downwards, optionally inserting rows, or to the right), each
    copy filled by a caller-supplied callback.
  * **Sheet mode** – one copy of the whole sheet per record.

Copies are always taken from the untouched template block; the first record
is written onto the template itself only after every other copy exists.
"""

from .binding import (
    bind_horizontal,
    bind_vertical,
    horizontal_copy_range,
    vertical_copy_insert_range,
    vertical_copy_range,
)
from .cells import copy_cell
from .document import CellType
from .exceptions import (
    ListToExcelError,
    ResourceLoadError,
    UnresolvedNameError,
    UnsupportedFormatError,
)
from .names import AreaReference, define_name, resolve_area, resolve_cell
from .ranges import Range
from .sheets import copy_sheet, copy_sheet_setup, remove_sheet
from .template import load_template, open_template, render_template

__all__ = [
    "AreaReference",
    "CellType",
    "ListToExcelError",
    "Range",
    "ResourceLoadError",
    "UnresolvedNameError",
    "UnsupportedFormatError",
    "bind_horizontal",
    "bind_vertical",
    "copy_cell",
    "copy_sheet",
    "copy_sheet_setup",
    "define_name",
    "horizontal_copy_range",
    "load_template",
    "open_template",
    "remove_sheet",
    "render_template",
    "resolve_area",
    "resolve_cell",
    "vertical_copy_insert_range",
    "vertical_copy_range",
]
