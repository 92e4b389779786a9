"""Interactive curses browser for an indexed directory tree."""

from __future__ import annotations

import curses
import subprocess
from typing import Callable

from ducview.model import Entry, FileType, Size, SizeType, SortOrder, size_type_for
from ducview.options import Option, OptionType

SizeFormatter = Callable[[Size, SizeType, bool], str]
NumberFormatter = Callable[[int], str]

PAIR_SIZE, PAIR_NAME, PAIR_CLASS, PAIR_GRAPH, PAIR_BAR, PAIR_CURSOR = range(1, 7)

_PAIRS = {
    PAIR_SIZE: (curses.COLOR_WHITE, curses.COLOR_BLACK),
    PAIR_NAME: (curses.COLOR_GREEN, curses.COLOR_BLACK),
    PAIR_CLASS: (curses.COLOR_YELLOW, curses.COLOR_BLACK),
    PAIR_GRAPH: (curses.COLOR_CYAN, curses.COLOR_BLACK),
    PAIR_BAR: (curses.COLOR_WHITE, curses.COLOR_BLUE),
    PAIR_CURSOR: (curses.COLOR_BLACK, curses.COLOR_CYAN),
}

_SIZE_TYPE_NAMES = {
    SizeType.APPARENT: "apparent size",
    SizeType.ACTUAL: "actual size",
    SizeType.COUNT: "file count",
}

UI_DESCR_LONG = (
    "The 'ui' subcommand queries the duc database and runs an interactive ncurses\n"
    "utility for exploring the disk usage of the given path. If no path is given the\n"
    "current working directory is explored.\n"
    "\n"
    "The following keys can be used to navigate and alter the file system:\n"
    "\n"
    "    up, pgup, j:     move cursor up\n"
    "    down, pgdn, k:   move cursor down\n"
    "    home, 0:         move cursor to top\n"
    "    end, $:          move cursor to bottom\n"
    "    left, backspace: go up to parent directory (..)\n"
    "    right, enter:    descent into selected directory\n"
    "    a:               toggle between actual and apparent disk usage\n"
    "    b:               toggle between exact and abbreviated sizes\n"
    "    c:               Toggle between file size and file count\n"
    "    h:               show help. press 'q' to return to the main screen\n"
    "    n:               toggle sort order between 'size' and 'name'\n"
    "    o:               try to open the file using xdg-open\n"
    "    q, escape:       quit\n"
)

_CTRL_D = 4
_CTRL_U = 21
_ESCAPE = 27

_TOGGLES = {
    ord("a"): "apparent",
    ord("b"): "bytes",
    ord("C"): "nocolor",
    ord("c"): "count",
    ord("g"): "graph",
    ord("n"): "name_sort",
}


def escape_control(name: str) -> str:
    """Show control characters in caret notation, e.g. ``^A``."""
    return "".join(c if ord(c) >= 32 else "^" + chr(ord(c) + 64) for c in name)


def graph_bar(size: int, size_max: int, cols: int) -> str:
    """The ``[===   ]`` bar for an entry; empty if the screen is too narrow."""
    width = cols - 30
    if width > cols // 2:
        width = cols // 2
    if width <= 2:
        return ""
    filled = min(max(width * size // max(size_max, 1), 0), width)
    return " [" + "=" * filled + " " * (width - filled) + "] "


def open_command(directory_path: str, name: str) -> list[str]:
    """Command line that opens an entry with the desktop's default application."""
    return ["xdg-open", f"{directory_path}/{name}"]


def _put(stdscr, y: int, x: int, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(y, x, text, attr)
    except curses.error:
        pass


def _append(stdscr, text: str, attr: int = 0) -> None:
    try:
        stdscr.addstr(text, attr)
    except curses.error:
        pass


class Browser:
    """Cursor, view settings and navigation state of the interactive browser."""

    def __init__(self, directory: Entry, rows: int = 25, cols: int = 80) -> None:
        self.directory = directory
        self.rows = rows
        self.cols = cols
        self.top = 0
        self.cur = 0
        self.apparent = False
        self.count = False
        self.bytes = False
        self.graph = True
        self.nocolor = False
        self.name_sort = False
        self._stack: list[tuple[Entry, int, int]] = []
        self.clamp()

    @property
    def size_type(self) -> SizeType:
        return size_type_for(self.count, self.apparent)

    @property
    def page_size(self) -> int:
        return self.rows - 2

    def _entries(self) -> list[Entry]:
        sort = SortOrder.NAME if self.name_sort else SortOrder.SIZE
        return self.directory.sorted_children(self.size_type, sort)

    def _size_max(self, entries: list[Entry]) -> int:
        size_type = self.size_type
        return max([1, *(e.size.get(size_type) for e in entries)])

    def clamp(self) -> None:
        """Keep the cursor on an entry and the cursor inside the visible page."""
        count = len(self.directory.children)
        page = self.page_size
        if self.cur < 0:
            self.cur = 0
        if self.cur > count - 1:
            self.cur = count - 1
        if self.cur < self.top:
            self.top = self.cur
        if self.cur > self.top + page - 1:
            self.top = self.cur - page + 1
        if self.top < 0:
            self.top = 0

    def _go_up(self) -> None:
        if self._stack:
            self.directory, self.cur, self.top = self._stack.pop()
        elif self.directory.parent is not None:
            self.directory = self.directory.parent
            self.cur = self.top = 0

    def _descend(self) -> None:
        entries = self._entries()
        if 0 <= self.cur < len(entries) and entries[self.cur].is_dir:
            self._stack.append((self.directory, self.cur, self.top))
            self.directory = entries[self.cur]
            self.cur = self.top = 0

    def handle_key(self, key: int) -> str | None:
        """Apply a key press.

        Returns ``"quit"``, ``"help"``, ``"open"`` or ``"resize"`` when the
        caller has to act, None otherwise.
        """
        page = self.page_size
        action = None
        if key in (ord("k"), curses.KEY_UP):
            self.cur -= 1
        elif key in (ord("j"), curses.KEY_DOWN):
            self.cur += 1
        elif key == _CTRL_U:
            self.cur -= page // 2
        elif key == curses.KEY_PPAGE:
            self.cur -= page
        elif key == _CTRL_D:
            self.cur += page // 2
        elif key == curses.KEY_NPAGE:
            self.cur += page
        elif key == curses.KEY_RESIZE:
            action = "resize"
        elif key in (ord("0"), curses.KEY_HOME):
            self.cur = 0
        elif key in (ord("$"), curses.KEY_END):
            self.cur = len(self.directory.children) - 1
        elif key in _TOGGLES:
            name = _TOGGLES[key]
            setattr(self, name, not getattr(self, name))
        elif key in (ord("h"), ord("?")):
            action = "help"
        elif key in (_ESCAPE, ord("q")):
            action = "quit"
        elif key in (curses.KEY_BACKSPACE, curses.KEY_LEFT):
            self._go_up()
        elif key in (curses.KEY_RIGHT, ord("\r"), ord("\n")):
            self._descend()
        elif key == ord("o"):
            action = "open"
        self.clamp()
        return action

    def header(self) -> str:
        """Title bar text: the current path."""
        return f" {self.directory.path} "

    def footer(self, format_size: SizeFormatter, format_number: NumberFormatter) -> str:
        """Status bar text with the totals of the current directory."""
        size_type = self.size_type
        dir_count = sum(1 for e in self.directory.children if e.is_dir)
        file_count = len(self.directory.children) - dir_count
        siz = format_size(self.directory.size, size_type, self.bytes)
        files = format_number(file_count)
        dirs = format_number(dir_count)
        if size_type is SizeType.COUNT:
            return f" Total {siz} files, {files} files and {dirs} directories here"
        return (
            f" Total {siz}B in {files} files and {dirs} directories "
            f"({_SIZE_TYPE_NAMES[size_type]})"
        )

    def _entry_parts(
        self, entry: Entry, format_size: SizeFormatter, size_max: int
    ) -> tuple[str, str, str, str]:
        size_type = self.size_type
        width = 12 if self.bytes else 7
        siz = f"{format_size(entry.size, size_type, self.bytes):>{width}}"
        bar = graph_bar(entry.size.get(size_type), size_max, self.cols) if self.graph else ""
        return siz, escape_control(entry.name), entry.type.char, bar

    def entry_line(self, entry: Entry, format_size: SizeFormatter) -> str:
        """The screen line for ``entry``."""
        siz, name, cls, bar = self._entry_parts(
            entry, format_size, self._size_max(self._entries()))
        text = f"{siz} {name}{cls}"
        if bar:
            column = self.cols - len(bar)
            text = text.ljust(column)[:column] + bar
        return text

    def _attributes(self) -> dict[str, int]:
        plain = {
            "size": 0,
            "name": curses.A_BOLD,
            "class": 0,
            "graph": 0,
            "bar": curses.A_REVERSE,
            "cursor": curses.A_REVERSE,
        }
        if self.nocolor:
            return plain
        try:
            return {
                "size": curses.color_pair(PAIR_SIZE),
                "name": curses.color_pair(PAIR_NAME),
                "class": curses.color_pair(PAIR_CLASS),
                "graph": curses.color_pair(PAIR_GRAPH),
                "bar": curses.color_pair(PAIR_BAR),
                "cursor": curses.color_pair(PAIR_CURSOR),
            }
        except curses.error:
            return plain

    def _draw(self, stdscr, format_size: SizeFormatter, format_number: NumberFormatter) -> None:
        attrs = self._attributes()
        stdscr.erase()
        _put(stdscr, 0, 0, " " * self.cols, attrs["bar"])
        _put(stdscr, 0, 1, self.header(), attrs["bar"])
        _put(stdscr, self.rows - 1, 0, " " * self.cols, attrs["bar"])
        _put(stdscr, self.rows - 1, 0, self.footer(format_size, format_number), attrs["bar"])

        entries = self._entries()
        size_max = self._size_max(entries)
        for y, index in enumerate(range(self.top, self.top + self.page_size), start=1):
            selected = index == self.cur
            base = attrs["cursor"] if selected else 0
            _put(stdscr, y, 0, " " * self.cols, base)
            if index >= len(entries):
                _put(stdscr, y, 0, "~", curses.A_DIM)
                continue
            siz, name, cls, bar = self._entry_parts(entries[index], format_size, size_max)
            _put(stdscr, y, 0, siz, base if selected else attrs["size"])
            _append(stdscr, " ", base)
            _append(stdscr, name, base if selected else attrs["name"])
            _append(stdscr, cls, base if selected else attrs["class"])
            if bar:
                _put(stdscr, y, self.cols - len(bar), bar, base if selected else attrs["graph"])
        stdscr.refresh()

    def _suspend(self) -> None:
        try:
            curses.endwin()
        except curses.error:
            pass

    def _show_help(self, stdscr) -> None:
        self._suspend()
        try:
            subprocess.run(["less", "-"], input=UI_DESCR_LONG, text=True, check=False)
        except OSError:
            pass
        stdscr.erase()
        stdscr.refresh()

    def _open_selected(self, stdscr) -> None:
        entries = self._entries()
        if not 0 <= self.cur < len(entries):
            return
        command = open_command(self.directory.path, entries[self.cur].name)
        self._suspend()
        try:
            subprocess.run(command, check=False)
        except OSError:
            _put(stdscr, self.rows - 1, 0, f"Cannot run command: {' '.join(command)}")
        stdscr.refresh()

    def run(self, stdscr, format_size: SizeFormatter, format_number: NumberFormatter) -> None:
        """Run the interactive loop on a curses window until the user quits."""
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        try:
            curses.start_color()
            for pair, (fg, bg) in _PAIRS.items():
                curses.init_pair(pair, fg, bg)
        except curses.error:
            pass
        stdscr.keypad(True)
        self.rows, self.cols = stdscr.getmaxyx()
        self.clamp()
        while True:
            self._draw(stdscr, format_size, format_number)
            action = self.handle_key(stdscr.getch())
            if action == "quit":
                return
            if action == "resize":
                self.rows, self.cols = stdscr.getmaxyx()
                self.clamp()
            elif action == "help":
                self._show_help(stdscr)
            elif action == "open":
                self._open_selected(stdscr)


UI_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "show apparent instead of actual file size"),
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("count", None, OptionType.BOOL, "show number of files instead of file size"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("name-sort", "n", OptionType.BOOL, "sort output by name instead of by size"),
    Option("no-color", None, OptionType.BOOL, "do not use colors on terminal output"),
)

_ = FileType