"""
Bind a list of records to a named template block.

The block is replicated once per record after the first. Each clone is
taken from the template's literal cells, so the template must stay
untouched until the last clone exists: the first record is written onto
the template only after every other record has its own filled copy.
"""

import logging

from .ranges import Range

logger = logging.getLogger(__name__)


def bind_vertical(sheet, name, add_offset_y, fill, records, insert=False):
    """Replicate block *name* downwards once per record and fill each copy.

    Args:
        sheet: Worksheet holding the template block.
        name: Defined name of the block.
        add_offset_y: Rows left between consecutive blocks.
        fill: Callable ``fill(range, record)``; addresses cells through
            ``range.cell(<name>)``.
        records: Sequence of records. It is not modified.
        insert: Push rows below each new block down instead of overwriting.

    Returns:
        The Range handles in record order; ``handles[0]`` is the template.
        Empty *records* is a no-op and returns an empty list.
    """
    records = list(records)
    if not records:
        return []

    first, rest = records[0], records[1:]
    original = Range(sheet, name)
    handles = [original]
    offset = add_offset_y
    for index, record in enumerate(rest, start=1):
        if insert:
            clone = original.vertical_copy_insert(offset)
        else:
            clone = original.vertical_copy(offset)
        clone.index = index
        fill(clone, record)
        handles.append(clone)
        offset = clone.shift_y

    # the template is filled last so every clone above copied it untouched
    fill(original, first)

    logger.info(f"Bound {len(records)} records to '{name}' on '{sheet.title}' "
                f"vertically (insert={insert})")
    return handles


def bind_horizontal(sheet, name, add_offset_x, fill, records):
    """Replicate block *name* to the right once per record and fill each copy.

    Same contract as :func:`bind_vertical`; columns to the right are always
    overwritten.
    """
    records = list(records)
    if not records:
        return []

    first, rest = records[0], records[1:]
    original = Range(sheet, name)
    handles = [original]
    offset = add_offset_x
    for index, record in enumerate(rest, start=1):
        clone = original.horizontal_copy(offset)
        clone.index = index
        fill(clone, record)
        handles.append(clone)
        offset = clone.shift_x

    fill(original, first)

    logger.info(f"Bound {len(records)} records to '{name}' on '{sheet.title}' "
                f"horizontally")
    return handles


def vertical_copy_range(sheet, name, add_offset_y, fill, records):
    """Copy and paste a block down once per record (overwriting below)."""
    return bind_vertical(sheet, name, add_offset_y, fill, records, insert=False)


def vertical_copy_insert_range(sheet, name, add_offset_y, fill, records):
    """Copy and insert a block down once per record (existing rows move down)."""
    return bind_vertical(sheet, name, add_offset_y, fill, records, insert=True)


def horizontal_copy_range(sheet, name, add_offset_x, fill, records):
    """Copy and paste a block to the right once per record."""
    return bind_horizontal(sheet, name, add_offset_x, fill, records)
