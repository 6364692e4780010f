"""
Block replication along rows (vertical) and columns (horizontal).

Both replicators read the source block at the name's literal coordinates on
the handle's sheet, never at a shifted location, so every clone is taken
from the untouched template. Only the vertical replicator can make room by
pushing existing rows down; horizontal replication always overwrites.
"""

import logging

from .cells import copy_cell
from .document import (
    add_merged_region,
    create_cell,
    existing_rows,
    last_row,
    peek_cell,
    region_coordinate,
    row_height,
    set_row_height,
    shift_rows,
)

logger = logging.getLogger(__name__)


def vertical_copy(rng, dest_sheet, add_offset_y=0, insert=False):
    """Copy the block of *rng* below itself onto *dest_sheet*.

    Args:
        rng: Source :class:`~list_to_excel.ranges.Range`.
        dest_sheet: Worksheet receiving the clone.
        add_offset_y: Extra rows between the end of *rng* and the clone.
        insert: Push rows at and below the clone position down first, so
            existing content is not overwritten.

    Returns:
        A new Range addressing the clone (same name, ``shift_y`` set to the
        clone's row distance from the literal block).
    """
    area = rng.area
    src_sheet = rng.sheet
    row_count = area.row_count
    shift = rng.shift_y + add_offset_y + row_count

    if insert:
        start = area.last_row + rng.shift_y + add_offset_y + 1
        shift_rows(dest_sheet, start, last_row(dest_sheet), row_count)

    # Row height is taken from the source only when the row is created here
    rows = existing_rows(dest_sheet)
    for y, x in area.cells():
        src = peek_cell(src_sheet, y, x)
        dest_row = shift + y
        if dest_row not in rows:
            set_row_height(dest_sheet, dest_row, row_height(src_sheet, y))
            rows.add(dest_row)
        copy_cell(src, create_cell(dest_sheet, dest_row, x))

    merged = 0
    for region in list(src_sheet.merged_cells.ranges):
        if area.first_row <= region.min_row and region.max_row <= area.last_row:
            add_merged_region(dest_sheet,
                              region.min_row + shift, region.max_row + shift,
                              region.min_col, region.max_col)
            merged += 1

    logger.debug(
        f"Vertical copy of '{rng.name}' ({area.coordinate}) -> '{dest_sheet.title}' "
        f"shift_y={shift}, insert={insert}, {merged} merged regions")
    return rng.derive(dest_sheet, shift, rng.shift_x)


def vertical_copy_to(rng, dest_sheet, row_index):
    """Insert a copy of *rng* so that it starts at *row_index* (for an unshifted range)."""
    add_offset_y = row_index - rng.area.last_row - 1
    return vertical_copy(rng, dest_sheet, add_offset_y, insert=True)


def horizontal_copy(rng, dest_sheet, add_offset_x=0):
    """Copy the block of *rng* to its right onto *dest_sheet*.

    Cells land on the block's literal rows, in the columns starting
    ``add_offset_x`` after the end of *rng*; whatever is there is
    overwritten. Merged regions are carried over only when they lie fully
    inside the block's rows and columns.
    """
    area = rng.area
    src_sheet = rng.sheet
    col_count = area.col_count
    shift = rng.shift_x + add_offset_x + col_count

    for y, x in area.cells():
        src = peek_cell(src_sheet, y, x)
        copy_cell(src, create_cell(dest_sheet, y, x + shift))

    merged = 0
    for region in list(src_sheet.merged_cells.ranges):
        if (area.first_col <= region.min_col and region.max_col <= area.last_col
                and area.first_row <= region.min_row and region.max_row <= area.last_row):
            add_merged_region(dest_sheet,
                              region.min_row, region.max_row,
                              region.min_col + shift, region.max_col + shift)
            merged += 1

    logger.debug(
        f"Horizontal copy of '{rng.name}' ({area.coordinate}) -> '{dest_sheet.title}' "
        f"shift_x={shift}, {merged} merged regions")
    return rng.derive(dest_sheet, rng.shift_y, shift)


def horizontal_copy_to(rng, dest_sheet, col_index):
    """Copy *rng* so that it starts at column *col_index* (for an unshifted range)."""
    add_offset_x = col_index - rng.area.last_col - 1
    return horizontal_copy(rng, dest_sheet, add_offset_x)


def describe(area, shift_y=0, shift_x=0):
    """A1 coordinate of *area* displaced by the given shifts."""
    return region_coordinate(area.first_row + shift_y, area.last_row + shift_y,
                             area.first_col + shift_x, area.last_col + shift_x)
