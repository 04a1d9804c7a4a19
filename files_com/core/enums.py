from enum import Enum


class FileType(str, Enum):
    """Entry type reported by Files.com."""

    FILE = "file"
    DIRECTORY = "directory"


class SortDirection(str, Enum):
    """Sort direction for file listings."""

    ASC = "asc"
    DESC = "desc"


class FileAction(str, Enum):
    """Upload actions accepted by the files endpoint."""

    PUT = "put"
    END = "end"
