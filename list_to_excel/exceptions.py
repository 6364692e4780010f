"""
Exceptions raised while loading, filling and writing a template.

    ListToExcelError
    ├── UnresolvedNameError     a symbolic name has no usable definition
    ├── UnsupportedFormatError  the template dialect cannot be determined
    └── ResourceLoadError       the template cannot be located or opened

Errors raised by a caller's fill callback are not wrapped; they propagate as-is.
"""


class ListToExcelError(Exception):
    """Base class for every error raised by :mod:`list_to_excel`."""


class UnresolvedNameError(ListToExcelError):
    """A named range or cell name could not be resolved."""

    def __init__(self, name, reason=None):
        self.name = name
        self.reason = reason
        message = f"Name '{name}' is not defined in the workbook"
        if reason:
            message = f"Name '{name}' cannot be resolved: {reason}"
        super().__init__(message)


class UnsupportedFormatError(ListToExcelError):
    """The template file name does not carry a supported suffix."""

    def __init__(self, filename, supported=()):
        self.filename = filename
        self.supported = tuple(supported)
        message = f"Wrong template file type, file name: {filename}"
        if self.supported:
            message += f" (supported: {', '.join(self.supported)})"
        super().__init__(message)


class ResourceLoadError(ListToExcelError):
    """The template could not be found or read."""

    def __init__(self, path, reason=None):
        self.path = path
        self.reason = reason
        message = f"Cannot load template '{path}'"
        if reason:
            message += f": {reason}"
        super().__init__(message)
