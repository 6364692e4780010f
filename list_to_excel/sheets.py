"""
Whole-sheet cloning: one copy of a template sheet per record.
"""

import logging
import re
from copy import copy

from openpyxl.utils import quote_sheetname
from openpyxl.workbook.defined_name import DefinedName

logger = logging.getLogger(__name__)

# Characters Excel does not accept in a sheet title
EXCEL_NAME_REGEX_INVALID_CHAR = re.compile(r"[:\\/?*\[\]]")
MAX_SHEET_TITLE_LENGTH = 31

_MARGIN_FIELDS = ("left", "right", "top", "bottom", "header", "footer")

_PAGE_SETUP_FIELDS = (
    "orientation",
    "paperSize",
    "paperHeight",
    "paperWidth",
    "scale",
    "fitToHeight",
    "fitToWidth",
    "firstPageNumber",
    "useFirstPageNumber",
    "pageOrder",
    "usePrinterDefaults",
    "blackAndWhite",
    "draft",
    "cellComments",
    "errors",
    "horizontalDpi",
    "verticalDpi",
    "copies",
)

_HEADER_FOOTER_PARTS = ("left", "center", "right")


def replace_sheet_name_invalid_char(raw_name):
    """Make *raw_name* usable as a sheet title."""
    name = EXCEL_NAME_REGEX_INVALID_CHAR.sub("-", str(raw_name))
    return name[:MAX_SHEET_TITLE_LENGTH]


def copy_sheet_setup(src, dst):
    """Copy page setup, margins, centering, print titles, header and footer.

    ``Workbook.copy_worksheet`` does not carry all of these over, so they are
    copied explicitly from *src* onto *dst*.
    """
    dst.sheet_properties.pageSetUpPr = copy(src.sheet_properties.pageSetUpPr)

    for field in _MARGIN_FIELDS:
        setattr(dst.page_margins, field, getattr(src.page_margins, field))

    dst.print_options.horizontalCentered = src.print_options.horizontalCentered
    dst.print_options.verticalCentered = src.print_options.verticalCentered
    dst.print_title_rows = src.print_title_rows
    dst.print_title_cols = src.print_title_cols

    for field in _PAGE_SETUP_FIELDS:
        setattr(dst.page_setup, field, getattr(src.page_setup, field))

    for part in _HEADER_FOOTER_PARTS:
        setattr(dst.oddHeader, part, copy(getattr(src.oddHeader, part)))
        setattr(dst.oddFooter, part, copy(getattr(src.oddFooter, part)))


def _destinations(defn):
    """(sheet title, coordinate) pairs of a range name; quotes in titles undoubled."""
    if defn.type != "RANGE" or "!" not in defn.attr_text:
        return []
    return [(title.replace("''", "'") if title else title, coord)
            for title, coord in defn.destinations]


def _refers_to(defn, sheet_title):
    return any(title == sheet_title for title, _coord in _destinations(defn))


def _retarget(defn, old_title, new_title):
    """New definition of *defn* with its references to *old_title* moved to *new_title*."""
    text = defn.attr_text
    if _refers_to(defn, old_title):
        text = ",".join(
            f"{quote_sheetname(new_title if title == old_title else title)}!{coord}"
            for title, coord in _destinations(defn)
        )
    return DefinedName(defn.name, attr_text=text, hidden=defn.hidden, comment=defn.comment)


def copy_sheet_names(src, dst):
    """Define *src*'s sheet-scoped names on *dst*, pointing at *dst*'s cells."""
    for name, defn in list(src.defined_names.items()):
        dst.defined_names[name] = _retarget(defn, src.title, dst.title)


def repoint_workbook_names(workbook, old_title, new_title):
    """Move workbook-scoped names referring to sheet *old_title* onto *new_title*."""
    for name, defn in list(workbook.defined_names.items()):
        if _refers_to(defn, old_title):
            workbook.defined_names[name] = _retarget(defn, old_title, new_title)
            logger.debug(f"Repointed name '{name}' from '{old_title}' to '{new_title}'")


def remove_sheet(sheet):
    """Remove *sheet* from its workbook."""
    sheet.parent.remove(sheet)


def copy_sheet(sheet, fill, records, title=None):
    """Clone *sheet* once per record, fill each clone, then drop the template.

    Each clone gets its own copy of the template's sheet-scoped names, so a
    fill can address cells by name on the clone. Workbook-scoped names that
    pointed at the template are moved to the first clone.

    Args:
        sheet: The template worksheet. It is removed from the workbook once
            every record has its own sheet.
        fill: Callable ``fill(worksheet, record)`` writing one record.
        records: Sequence of records, one sheet each, in order.
        title: Optional callable ``title(record, index)`` naming each clone.

    Returns:
        The cloned worksheets in record order. An empty *records* leaves the
        workbook untouched and returns an empty list.
    """
    records = list(records)
    if not records:
        return []

    workbook = sheet.parent
    clones = []
    for index, record in enumerate(records):
        clone = workbook.copy_worksheet(sheet)
        copy_sheet_setup(sheet, clone)
        if title is not None:
            clone.title = replace_sheet_name_invalid_char(title(record, index))
        copy_sheet_names(sheet, clone)
        fill(clone, record)
        clones.append(clone)

    template_title = sheet.title
    # workbook names on the template follow the first record's sheet
    repoint_workbook_names(workbook, template_title, clones[0].title)
    remove_sheet(sheet)
    logger.info(f"Cloned sheet '{template_title}' for {len(clones)} records")
    return clones
