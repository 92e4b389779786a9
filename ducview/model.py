"""Sizes, directory entries and index reports."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable

from ducview.options import Option, OptionType


class FileType(Enum):
    """Type of an indexed file."""

    BLOCK_DEVICE = "block device"
    CHAR_DEVICE = "character device"
    DIRECTORY = "directory"
    FIFO = "fifo"
    SYMLINK = "symbolic link"
    REGULAR = "regular file"
    SOCKET = "socket"
    UNKNOWN = "unknown"

    @property
    def char(self) -> str:
        """One-character type indicator."""
        return _TYPE_CHARS[self]


_TYPE_CHARS = {
    FileType.BLOCK_DEVICE: " ",
    FileType.CHAR_DEVICE: " ",
    FileType.DIRECTORY: "/",
    FileType.FIFO: "|",
    FileType.SYMLINK: "@",
    FileType.REGULAR: " ",
    FileType.SOCKET: "=",
    FileType.UNKNOWN: "?",
}


class SizeType(Enum):
    """Which of the sizes to report."""

    APPARENT = "apparent"
    ACTUAL = "actual"
    COUNT = "count"


class SortOrder(Enum):
    SIZE = "size"
    NAME = "name"


@dataclass(frozen=True)
class Size:
    """Apparent size, actual disk usage and file count."""

    apparent: int = 0
    actual: int = 0
    count: int = 0

    def get(self, size_type: SizeType) -> int:
        if size_type is SizeType.APPARENT:
            return self.apparent
        if size_type is SizeType.ACTUAL:
            return self.actual
        return self.count


@dataclass(eq=False)
class Entry:
    """A file or directory in the index, with its children."""

    name: str
    type: FileType = FileType.REGULAR
    size: Size = field(default_factory=Size)
    children: list[Entry] = field(default_factory=list)
    parent: Entry | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        for child in self.children:
            child.parent = self

    @property
    def is_dir(self) -> bool:
        return self.type is FileType.DIRECTORY

    @property
    def path(self) -> str:
        if self.parent is None:
            return self.name
        return f"{self.parent.path.rstrip('/')}/{self.name}"

    def sorted_children(self, size_type: SizeType, sort: SortOrder) -> list[Entry]:
        """Children largest first, or by name; ties keep their order."""
        if sort is SortOrder.NAME:
            return sorted(self.children, key=lambda e: e.name)
        return sorted(self.children, key=lambda e: e.size.get(size_type), reverse=True)


@dataclass(frozen=True)
class Report:
    """Summary of one indexed path."""

    path: str
    size: Size
    file_count: int
    dir_count: int
    time_start: float
    time_stop: float = 0.0


def size_type_for(count: bool, apparent: bool) -> SizeType:
    """File count wins over apparent size, which wins over actual size."""
    if count:
        return SizeType.COUNT
    return SizeType.APPARENT if apparent else SizeType.ACTUAL


def format_report_table(
    reports: Iterable[Report],
    apparent: bool,
    format_size: Callable[[Size, SizeType], str],
    format_number: Callable[[int], str],
) -> str:
    """Render the table of indexed paths shown by the info command."""
    size_type = SizeType.APPARENT if apparent else SizeType.ACTUAL
    lines = ["Date       Time       Files    Dirs    Size Path"]
    for report in reports:
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(report.time_start))
        files = format_number(report.file_count)
        dirs = format_number(report.dir_count)
        size = format_size(report.size, size_type)
        lines.append(f"{stamp} {files:>7} {dirs:>7} {size:>7} {report.path}")
    return "\n".join(lines) + "\n"


INFO_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "show apparent instead of actual file size"),
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
)