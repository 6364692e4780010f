"""
Named range resolution.

Maps a symbolic name defined in the workbook (``Formulas > Name Manager`` in
Excel) to the rectangle it refers to. Sheet-scoped names win over
workbook-scoped ones. Resolution never mutates the workbook.
"""

from dataclasses import dataclass
from typing import Optional

from openpyxl.utils import (
    absolute_coordinate,
    coordinate_to_tuple,
    quote_sheetname,
    range_boundaries,
)
from openpyxl.utils.exceptions import CellCoordinatesException
from openpyxl.workbook.defined_name import DefinedName

from .document import region_coordinate
from .exceptions import UnresolvedNameError


@dataclass(frozen=True)
class AreaReference:
    """A resolved rectangular area (1-based, inclusive bounds)."""
    sheet_title: Optional[str]
    first_row: int
    first_col: int
    last_row: int
    last_col: int

    @property
    def row_count(self):
        return self.last_row - self.first_row + 1

    @property
    def col_count(self):
        return self.last_col - self.first_col + 1

    @property
    def coordinate(self):
        return region_coordinate(self.first_row, self.last_row,
                                 self.first_col, self.last_col)

    def cells(self):
        """Yield every (row, col) of the area, row by row."""
        for y in range(self.first_row, self.last_row + 1):
            for x in range(self.first_col, self.last_col + 1):
                yield y, x


def find_definition(workbook, name, sheet=None):
    """Return the ``DefinedName`` for *name*, or None.

    Args:
        workbook: The openpyxl workbook.
        name: The defined name.
        sheet: Optional worksheet whose local names are searched first.
    """
    if sheet is not None and name in sheet.defined_names:
        return sheet.defined_names[name]
    return workbook.defined_names.get(name)


def resolve_area(workbook, name, sheet=None):
    """Resolve *name* to an :class:`AreaReference`.

    Raises:
        UnresolvedNameError: the name is undefined, refers to a constant or a
            broken reference, spans several areas, or is not bounded
            (whole rows/columns).
    """
    defn = find_definition(workbook, name, sheet)
    if defn is None:
        raise UnresolvedNameError(name)

    text = defn.attr_text
    if defn.type != "RANGE":
        raise UnresolvedNameError(name, f"refers to {text!r}, not a cell range")

    if "!" in text:
        destinations = list(defn.destinations)
    else:
        destinations = [(None, text)]
    if len(destinations) != 1:
        raise UnresolvedNameError(
            name, f"refers to {len(destinations)} areas ({text!r}), expected one")

    sheet_title, coord = destinations[0]
    try:
        min_col, min_row, max_col, max_row = range_boundaries(coord)
    except ValueError as err:
        raise UnresolvedNameError(name, str(err)) from err
    if None in (min_col, min_row, max_col, max_row):
        raise UnresolvedNameError(name, f"{text!r} is not a bounded area")

    return AreaReference(sheet_title, min_row, min_col, max_row, max_col)


def resolve_cell(workbook, name, sheet=None):
    """Resolve *name* to the (row, col) of a single cell.

    A defined name yields the top-left cell of its area. An undefined name
    that is itself an A1 reference (``"B7"``, ``"$B$7"``) is taken literally.
    """
    if find_definition(workbook, name, sheet) is not None:
        area = resolve_area(workbook, name, sheet)
        return area.first_row, area.first_col
    try:
        return coordinate_to_tuple(name.replace("$", ""))
    except (CellCoordinatesException, ValueError) as err:
        raise UnresolvedNameError(name) from err


def define_name(workbook, name, sheet, coordinate, local=False):
    """Define *name* as *coordinate* (e.g. ``"A11:C12"``) on *sheet*.

    With ``local=True`` the name is scoped to *sheet* instead of the workbook.
    """
    ref = f"{quote_sheetname(sheet.title)}!{absolute_coordinate(coordinate)}"
    defn = DefinedName(name, attr_text=ref)
    if local:
        sheet.defined_names[name] = defn
    else:
        workbook.defined_names[name] = defn
    return defn
