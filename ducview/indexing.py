"""Index request settings and progress reporting."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag, auto
from typing import Any, Callable, Iterable, Mapping

from ducview.model import Report, Size, SizeType
from ducview.options import Option, OptionType


class IndexFlags(IntFlag):
    NONE = 0
    XDEV = auto()
    HIDE_FILE_NAMES = auto()
    CHECK_HARD_LINKS = auto()
    DRY_RUN = auto()


class OpenFlags(IntFlag):
    RO = auto()
    RW = auto()
    COMPRESS = auto()
    FORCE = auto()


@dataclass
class IndexRequest:
    """What to index and how."""

    excludes: list[str] = field(default_factory=list)
    fs_includes: list[str] = field(default_factory=list)
    fs_excludes: list[str] = field(default_factory=list)
    max_depth: int | None = None
    username: str | None = None
    uid: int | None = None
    flags: IndexFlags = IndexFlags.NONE


def build_request(
    values: Mapping[str, Any],
    excludes: Iterable[str],
    fs_includes: Iterable[str],
    fs_excludes: Iterable[str],
) -> IndexRequest:
    """Build an index request from parsed option values."""
    flags = IndexFlags.NONE
    if values.get("one-file-system"):
        flags |= IndexFlags.XDEV
    if values.get("hide-file-names"):
        flags |= IndexFlags.HIDE_FILE_NAMES
    if values.get("check-hard-links"):
        flags |= IndexFlags.CHECK_HARD_LINKS
    if values.get("dry-run"):
        flags |= IndexFlags.DRY_RUN
    return IndexRequest(
        excludes=list(excludes),
        fs_includes=list(fs_includes),
        fs_excludes=list(fs_excludes),
        max_depth=values.get("max-depth") or None,
        username=values.get("username") or None,
        uid=values.get("uid") or None,
        flags=flags,
    )


def open_flags(values: Mapping[str, Any]) -> OpenFlags:
    """Database open flags: read-write and compressed unless told otherwise."""
    flags = OpenFlags.RW | OpenFlags.COMPRESS
    if values.get("force"):
        flags |= OpenFlags.FORCE
    if values.get("uncompressed"):
        flags &= ~OpenFlags.COMPRESS
    return flags


class ProgressMeter:
    """Renders a one-line progress display with a bouncing marker."""

    def __init__(
        self,
        format_size: Callable[[Size, SizeType], str],
        format_number: Callable[[int], str],
    ) -> None:
        self.format_size = format_size
        self.format_number = format_number
        self._step = 0

    def render(self, report: Report) -> str:
        position = 7 - abs(self._step - 7)
        self._step = (self._step + 1) % 14
        meter = "-" * position + "#" + "-" * (7 - position)
        size = self.format_size(report.size, SizeType.ACTUAL)
        files = self.format_number(report.file_count)
        dirs = self.format_number(report.dir_count)
        return f"\x1b[K[{meter}] Indexed {size}b in {files} files and {dirs} directories\r"


def summary_message(report: Report, apparent: str, actual: str, duration: str) -> str:
    """The message logged after a path has been indexed."""
    return (
        f"Indexed {report.file_count} files and {report.dir_count} directories, "
        f"({apparent}B apparent, {actual}B actual) in {duration}"
    )


INDEX_OPTIONS = (
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("database", "d", OptionType.STRING, "use database file VAL"),
    Option("exclude", "e", OptionType.FUNC, "exclude files matching VAL"),
    Option("check-hard-links", "H", OptionType.BOOL, "count hard links only once",
           "if two or more hard links point to the same file, only one of the hard links "
           "is displayed and counted"),
    Option("force", "f", OptionType.BOOL, "force writing in case of corrupted db"),
    Option("fs-exclude", None, OptionType.FUNC, "exclude file system type VAL during indexing",
           "VAL is a comma separated list of file system types as found in your systems "
           "fstab, for example ext3,ext4,dosfs"),
    Option("fs-include", None, OptionType.FUNC, "include file system type VAL during indexing",
           "VAL is a comma separated list of file system types as found in your systems "
           "fstab, for example ext3,ext4,dosfs"),
    Option("hide-file-names", None, OptionType.BOOL, "hide file names in index (privacy)",
           "the names of directories will be preserved, but the names of the individual "
           "files will be hidden"),
    Option("uid", "U", OptionType.INT, "limit index to only files/dirs owned by uid", default=0),
    Option("username", "u", OptionType.STRING,
           "limit index to only files/dirs owned by username"),
    Option("max-depth", "m", OptionType.INT, "limit directory names to given depth",
           "when this option is given duc will traverse the complete file system, but will "
           "only the first VAL levels of directories in the database to reduce the size of "
           "the index", default=0),
    Option("one-file-system", "x", OptionType.BOOL, "skip directories on different file systems"),
    Option("progress", "p", OptionType.BOOL, "show progress during indexing"),
    Option("dry-run", None, OptionType.BOOL, "do not update database, just crawl"),
    Option("uncompressed", None, OptionType.BOOL, "do not use compression for database",
           "Duc enables compression if the underlying database supports this. This reduces "
           "index size at the cost of slightly longer indexing time"),
)