"""Terminal listing of directory sizes, optionally as a tree or bar graph."""

from __future__ import annotations

from dataclasses import dataclass
from itertools import takewhile
from typing import Callable

from wcwidth import wcswidth

from ducview.model import Entry, Size, SizeType, SortOrder, size_type_for
from ducview.options import Option, OptionType

SizeFormatter = Callable[[Size, SizeType, bool], str]

MAX_DEPTH = 32

COLOR_RESET = "\x1b[0m"
COLOR_RED = "\x1b[31m"
COLOR_YELLOW = "\x1b[33m"

TREE_ASCII = ("####", " `+-", "  |-", "  `-", "  | ", "    ")
TREE_UTF8 = ("####", " ╰┬─", "  ├─", "  ╰─", "  │ ", "    ")


def string_width(text: str) -> int:
    """Width of ``text`` on a monospace terminal; its length if that is unknown."""
    width = wcswidth(text)
    return width if width > 0 else len(text)


@dataclass
class ListingStyle:
    """How a listing is rendered."""

    apparent: bool = False
    count: bool = False
    ascii: bool = False
    bytes: bool = False
    classify: bool = False
    directory: bool = False
    color: bool = False
    full_path: bool = False
    graph: bool = False
    recursive: bool = False
    dirs_only: bool = False
    levels: int = 4
    name_sort: bool = False
    width: int = 80

    @property
    def size_type(self) -> SizeType:
        return size_type_for(self.count, self.apparent)

    @property
    def sort(self) -> SortOrder:
        return SortOrder.NAME if self.name_sort else SortOrder.SIZE


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator >= 0) == (denominator > 0) else -quotient


class _Lister:
    def __init__(self, style: ListingStyle, format_size: SizeFormatter) -> None:
        self.style = style
        self.format_size = format_size
        # Graph bars cannot be aligned next to full paths.
        self.graph = style.graph and not style.full_path
        self.tree = TREE_ASCII if style.ascii else TREE_UTF8
        self.prefix = [0] * (MAX_DEPTH + 2)
        self.out: list[str] = []

    def list_dir(self, directory: Entry, level: int, parent_path: str) -> None:
        style = self.style
        if level > style.levels:
            return
        size_type = style.size_type
        entries = directory.sorted_children(size_type, style.sort)

        max_size = max((e.size.get(size_type) for e in entries), default=0)
        max_name_len = max((string_width(e.name) for e in entries), default=0)
        max_size_len = 12 if style.bytes else 6
        if style.classify:
            max_name_len += 1

        count = len(entries)
        n = 0
        for entry in entries:
            if style.dirs_only and not entry.is_dir:
                continue
            size = entry.size.get(size_type)

            if style.recursive:
                if n == 0:
                    self.prefix[level] = 1
                if n >= 1:
                    self.prefix[level] = 2
                if n == count - 1:
                    self.prefix[level] = 3

            color_on = color_off = ""
            if style.color:
                color_off = COLOR_RESET
                if size >= max_size // 8:
                    color_on = COLOR_YELLOW
                if size >= max_size // 2:
                    color_on = COLOR_RED

            siz = self.format_size(entry.size, size_type, style.bytes)
            parts = [color_on, f"{siz:>{max_size_len}}", color_off]

            if style.recursive and not style.full_path:
                parts.extend(self.tree[p] for p in takewhile(bool, self.prefix))

            parts.append(" ")

            child_path = parent_path
            if style.full_path:
                parts.append(parent_path)
                child_path = f"{parent_path}{entry.name}/"

            used = string_width(entry.name) + 1
            parts.append(entry.name)
            if style.classify:
                parts.append(entry.type.char)
                used += 1

            if self.graph:
                parts.append(" " * max(0, max_name_len - used + 1))
                bar_width = style.width - max_name_len - max_size_len - 5
                bar_width -= (level + 1) * 4
                filled = _trunc_div(bar_width * size, max_size) if max_size else 0
                plus = max(filled, 0)
                parts.append(f" [{color_on}")
                parts.append("+" * plus + " " * max(bar_width - plus, 0))
                parts.append(f"{color_off}]")

            self.out.append("".join(parts) + "\n")

            if style.recursive and level < MAX_DEPTH and entry.is_dir:
                self.prefix[level] = 5 if n == count - 1 else 4
                self.list_dir(entry, level + 1, child_path)

            n += 1

        self.prefix[level] = 0


def render_listing(directory: Entry, style: ListingStyle, format_size: SizeFormatter) -> str:
    """List the entries of ``directory`` as configured by ``style``."""
    lister = _Lister(style, format_size)
    lister.list_dir(directory, 0, "")
    return "".join(lister.out)


def render_directory_only(
    path: str, directory: Entry, style: ListingStyle, format_size: SizeFormatter
) -> str:
    """One line with the total size of ``directory`` itself."""
    siz = format_size(directory.size, style.size_type, style.bytes)
    suffix = "/" if style.classify else ""
    return f"{siz} {path}{suffix}\n"


LS_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "show apparent instead of actual file size"),
    Option("ascii", None, OptionType.BOOL, "use ASCII characters instead of UTF-8 to draw tree"),
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("classify", "F", OptionType.BOOL,
           "append file type indicator (one of */) to entries"),
    Option("color", "c", OptionType.BOOL, "colorize output (only on ttys)"),
    Option("count", None, OptionType.BOOL, "show number of files instead of file size"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("directory", "D", OptionType.BOOL, "list directory itself, not its contents"),
    Option("dirs-only", None, OptionType.BOOL, "list only directories, skip individual files"),
    Option("full-path", None, OptionType.BOOL,
           "show full path instead of tree in recursive view"),
    Option("graph", "g", OptionType.BOOL, "draw graph with relative size for each entry"),
    Option("levels", "l", OptionType.INT, "traverse up to ARG levels deep [4]", default=4),
    Option("name-sort", "n", OptionType.BOOL, "sort output by name instead of by size"),
    Option("recursive", "R", OptionType.BOOL, "recursively list subdirectories"),
)