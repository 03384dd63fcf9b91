"""
Exceptions raised while reading and editing association files

I/O problems are not wrapped: they surface as the built-in OSError family
so callers can tell a missing file apart from a broken one.
"""
from typing import Optional


class MimeAppsError(Exception):
    """Base class for mimeapps errors"""


class AssociationParseError(MimeAppsError):
    """The grouped key-value text could not be parsed"""

    def __init__(self, message: str, line_number: int = 0, file_name: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.line_number = line_number
        self.file_name = file_name

    def __str__(self):
        location = self.file_name or '<string>'
        if self.line_number:
            return f"{location}:{self.line_number}: {self.message}"
        return f"{location}: {self.message}"


class InvalidMimeTypeError(AssociationParseError):
    """A key of an association group is not a valid MIME type name"""

    def __init__(self, group_name: str, key: str, value: str = '',
                 line_number: int = 0, file_name: Optional[str] = None):
        super().__init__(f"Invalid MIME type name {key!r} in group [{group_name}]",
                         line_number, file_name)
        self.group_name = group_name
        self.key = key
        self.value = value
