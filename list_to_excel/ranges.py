"""
Range handles over named template blocks.
"""

from . import replicators
from .names import resolve_area, resolve_cell


class Range:
    """A logical view (sheet, shift_y, shift_x, name) over a named block.

    A Range does not own cells. Its area is the name's literal rectangle,
    resolved on first use and cached for the lifetime of the handle; cells
    are addressed at that literal location displaced by ``shift_y`` rows and
    ``shift_x`` columns. Copy operations always read the literal location and
    return a new handle for the clone; an existing handle is never modified.

    ``index`` is the position of the record bound to this handle (0 for the
    template itself).
    """

    def __init__(self, sheet, name, shift_y=0, shift_x=0, scope=None):
        self._sheet = sheet
        self._name = name
        self._shift_y = shift_y
        self._shift_x = shift_x
        # worksheet whose local names take precedence when resolving
        self._scope = scope if scope is not None else sheet
        self._area = None
        self.index = 0

    @property
    def sheet(self):
        return self._sheet

    @property
    def name(self):
        return self._name

    @property
    def shift_y(self):
        return self._shift_y

    @property
    def shift_x(self):
        return self._shift_x

    @property
    def workbook(self):
        return self._sheet.parent

    @property
    def area(self):
        """The name's literal :class:`~list_to_excel.names.AreaReference`."""
        if self._area is None:
            self._area = resolve_area(self.workbook, self._name, self._scope)
        return self._area

    @property
    def coordinate(self):
        """A1 coordinate of the block this handle addresses."""
        return replicators.describe(self.area, self._shift_y, self._shift_x)

    def cell(self, name):
        """Get (or create) the cell called *name* inside this range.

        *name* is a defined name (or a literal A1 reference) in template
        coordinates; the range's shifts are applied.
        """
        row, col = resolve_cell(self.workbook, name, self._scope)
        return self._sheet.cell(row=row + self._shift_y, column=col + self._shift_x)

    def derive(self, sheet, shift_y, shift_x):
        """New handle for the same name on *sheet* with the given shifts."""
        clone = Range(sheet, self._name, shift_y, shift_x, scope=self._scope)
        clone._area = self._area
        return clone

    # ------------------------------------------------------------------
    # Copy operations
    # ------------------------------------------------------------------

    def vertical_copy(self, add_offset_y=0):
        """Copy the block downwards, overwriting whatever is there."""
        return replicators.vertical_copy(self, self._sheet, add_offset_y, insert=False)

    def vertical_copy_insert(self, add_offset_y=0):
        """Copy the block downwards, pushing existing rows below it further down."""
        return replicators.vertical_copy(self, self._sheet, add_offset_y, insert=True)

    def vertical_copy_to(self, dest_sheet, row_index):
        return replicators.vertical_copy_to(self, dest_sheet, row_index)

    def horizontal_copy(self, add_offset_x=0):
        """Copy the block to the right, overwriting whatever is there."""
        return replicators.horizontal_copy(self, self._sheet, add_offset_x)

    def horizontal_copy_to(self, dest_sheet, col_index):
        return replicators.horizontal_copy_to(self, dest_sheet, col_index)

    def __repr__(self):
        return (f"Range(sheet={self._sheet.title!r}, name={self._name!r}, "
                f"shift_y={self._shift_y}, shift_x={self._shift_x})")
