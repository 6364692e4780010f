"""
Template loading and report writing.

A template is an Excel workbook on disk. Its dialect is chosen from the
file suffix before anything is read. Rendering loads the template, lets the
caller fill it, serializes it in memory and only then hands the bytes to
the sink, so a failed fill never produces a partial document. The workbook
is closed on every path.
"""

import io
import logging
import os
import zipfile
from contextlib import contextmanager
from dataclasses import dataclass

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .exceptions import ResourceLoadError, UnsupportedFormatError

logger = logging.getLogger(__name__)

# suffix -> media type
SUPPORTED_FORMATS = {
    ".xlsx": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    ".xlsm": "application/vnd.ms-excel.sheet.macroEnabled.12",
}


@dataclass
class RenderResult:
    """What a transport needs to announce a rendered report."""
    filename: str
    media_type: str
    content_disposition: str
    size: int


def detect_format(filename):
    """Return the lower-cased suffix of *filename* if it is a supported dialect."""
    suffix = os.path.splitext(str(filename))[1].lower()
    if suffix not in SUPPORTED_FORMATS:
        raise UnsupportedFormatError(filename, SUPPORTED_FORMATS)
    return suffix


def media_type_for(filename):
    return SUPPORTED_FORMATS[detect_format(filename)]


def content_disposition(filename):
    return f'attachment; filename="{os.path.basename(str(filename))}"'


def resolve_template_path(name, template_dir=None):
    """Locate template *name*, relative to *template_dir* unless absolute."""
    path = str(name)
    if template_dir and not os.path.isabs(path):
        path = os.path.join(template_dir, path)
    if not os.path.isfile(path):
        raise ResourceLoadError(path, "file not found")
    return path


def load_template(name, template_dir=None):
    """Load template *name* into an openpyxl workbook.

    Raises:
        UnsupportedFormatError: the suffix is not ``.xlsx`` or ``.xlsm``.
        ResourceLoadError: the file is missing or cannot be parsed.
    """
    suffix = detect_format(name)
    path = resolve_template_path(name, template_dir)
    try:
        workbook = load_workbook(path, keep_vba=(suffix == ".xlsm"))
    except (OSError, zipfile.BadZipFile, InvalidFileException, KeyError) as err:
        raise ResourceLoadError(path, str(err)) from err
    logger.info(f"Loaded template: {path} ({len(workbook.sheetnames)} sheets)")
    return workbook


@contextmanager
def open_template(name, template_dir=None):
    """Context manager yielding the loaded template; closes it on exit."""
    workbook = load_template(name, template_dir)
    try:
        yield workbook
    finally:
        workbook.close()


def serialize(workbook):
    """Return the workbook as bytes."""
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def write_output(data, sink):
    """Write *data* to *sink*, a file path or a binary stream."""
    if isinstance(sink, (str, os.PathLike)):
        path = os.fspath(sink)
        os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
        with open(path, "wb") as f:
            f.write(data)
        logger.info(f"Wrote report: {path} ({len(data)} bytes)")
    else:
        sink.write(data)


def render_template(template_name, sink, fill, template_dir=None, response_name=None):
    """Load a template, fill it and write the result to *sink*.

    Args:
        template_name: Template file name (its suffix selects the dialect).
        sink: Output path or binary stream. Nothing is written unless *fill*
            and serialization both succeed.
        fill: Callable ``fill(workbook)`` writing the data.
        template_dir: Directory the template name is resolved against.
        response_name: File name to announce; defaults to the template's.

    Returns:
        RenderResult describing the written document.
    """
    response_name = response_name or os.path.basename(str(template_name))
    media_type = media_type_for(response_name)

    with open_template(template_name, template_dir) as workbook:
        fill(workbook)
        data = serialize(workbook)
        write_output(data, sink)

    return RenderResult(
        filename=response_name,
        media_type=media_type,
        content_disposition=content_disposition(response_name),
        size=len(data),
    )
