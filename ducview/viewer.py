"""State and input handling of the interactive graphical viewer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from ducview.graphopts import Palette, parse_palette
from ducview.model import Entry, SizeType, size_type_for
from ducview.options import Option, OptionType

MIN_LEVELS = 1
MAX_LEVELS = 10
DEFAULT_LEVELS = 4
MAX_NAME_LEN = 30

BUTTON_LEFT = 1
BUTTON_RIGHT = 3
BUTTON_WHEEL_UP = 4
BUTTON_WHEEL_DOWN = 5

KEY_ESCAPE = "Escape"
KEY_BACKSPACE = "BackSpace"

SpotFinder = Callable[[Entry, float, float], "Entry | None"]

GUI_DESCR_LONG = (
    "The 'gui' subcommand queries the duc database and runs an interactive graphical\n"
    "utility for exploring the disk usage of the given path. If no path is given the\n"
    "current working directory is explored.\n"
    "\n"
    "The following keys can be used to navigate and alter the graph:\n"
    "\n"
    "    +           increase maximum graph depth\n"
    "    -           decrease maximum graph depth\n"
    "    0           Set default graph depth\n"
    "    a           Toggle between apparent and actual disk usage\n"
    "    b           Toggle between exact byte count and abbreviated sizes\n"
    "    c           Toggle between file size and file count\n"
    "    f           toggle graph fuzz\n"
    "    g           toggle graph gradient\n"
    "    p           toggle palettes\n"
    "    backspace   go up one directory\n"
)


def dpi_from_display(width_px: int, width_mm: float) -> float | None:
    """Resolution of a display from its width in pixels and millimetres.

    Returns None when either dimension is unknown (zero).
    """
    if not width_px or not width_mm:
        return None
    return 25.4 * width_px / width_mm


@dataclass
class ViewerState:
    """Everything the viewer draws from, changed by keys, buttons and scrolling."""

    directory: Entry
    levels: int = DEFAULT_LEVELS
    apparent: bool = False
    count: bool = False
    bytes: bool = False
    gradient: bool = False
    dark: bool = False
    ring_gap: int = 4
    palette: Palette = Palette.SIZE
    opt_fuzz: float = 0.5
    fuzz: float | None = None
    tooltip_x: float = 0.0
    tooltip_y: float = 0.0
    scroll: float = 0.0

    def __post_init__(self) -> None:
        if self.fuzz is None:
            self.fuzz = self.opt_fuzz

    @classmethod
    def from_options(cls, directory: Entry, values: dict) -> ViewerState:
        """Build the initial state from parsed option values."""
        return cls(
            directory=directory,
            levels=values.get("levels", DEFAULT_LEVELS),
            apparent=bool(values.get("apparent", False)),
            count=bool(values.get("count", False)),
            bytes=bool(values.get("bytes", False)),
            gradient=bool(values.get("gradient", False)),
            dark=bool(values.get("dark", False)),
            ring_gap=values.get("ring-gap", 4),
            palette=parse_palette(values.get("palette"), Palette.SIZE),
            opt_fuzz=values.get("fuzz", 0.5),
        )

    def clamp_levels(self) -> int:
        """Keep the graph depth between 1 and 10 and return it."""
        self.levels = max(MIN_LEVELS, min(MAX_LEVELS, self.levels))
        return self.levels

    def size_type(self) -> SizeType:
        return size_type_for(self.count, self.apparent)

    def _go_up(self) -> None:
        if self.directory.parent is not None:
            self.directory = self.directory.parent

    def handle_key(self, key: str) -> bool:
        """Apply a key press; returns True when the viewer should quit.

        Letters match regardless of case; ``Escape`` and ``BackSpace`` name
        those keys.
        """
        if key in (KEY_ESCAPE, "q", "Q"):
            return True
        if key == KEY_BACKSPACE:
            self._go_up()
            return False
        letter = key.lower() if len(key) == 1 else key
        if letter == "-":
            self.levels -= 1
        elif letter == "=":
            self.levels += 1
        elif letter == "0":
            self.levels = DEFAULT_LEVELS
        elif letter == "a":
            self.apparent = not self.apparent
        elif letter == "c":
            self.count = not self.count
        elif letter == "b":
            self.bytes = not self.bytes
        elif letter == "f":
            self.fuzz = self.opt_fuzz if self.fuzz == 0 else 0
        elif letter == "g":
            self.gradient = not self.gradient
        elif letter == ",":
            if self.ring_gap > 0:
                self.ring_gap -= 1
        elif letter == ".":
            self.ring_gap += 1
        elif letter == "p":
            self.palette = Palette((self.palette.value + 1) % len(Palette))
        return False

    def handle_button(
        self, button: int, x: float, y: float, find_spot: SpotFinder
    ) -> None:
        """Apply a mouse button press at ``(x, y)``.

        Left click descends into the directory under the pointer, right click
        goes up, and the wheel changes the graph depth.
        """
        if button == BUTTON_LEFT:
            target = find_spot(self.directory, x, y)
            if target is not None:
                self.directory = target
        elif button == BUTTON_RIGHT:
            self._go_up()
        elif button == BUTTON_WHEEL_UP:
            self.levels -= 1
        elif button == BUTTON_WHEEL_DOWN:
            self.levels += 1

    def handle_scroll(self, offset: float) -> None:
        """Accumulate smooth scrolling; each full step changes the depth by one."""
        self.scroll += offset
        if self.scroll < -1:
            self.levels -= 1
            self.scroll += 1
        if self.scroll > 1:
            self.levels += 1
            self.scroll -= 1


GUI_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "show apparent instead of actual file size"),
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("count", None, OptionType.BOOL, "show number of files instead of file size"),
    Option("dark", None, OptionType.BOOL, "use dark background color"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("fuzz", None, OptionType.DOUBLE, "use radius fuzz factor when drawing graph",
           default=0.5),
    Option("gradient", None, OptionType.BOOL, "draw graph with color gradient"),
    Option("levels", "l", OptionType.INT, "draw up to VAL levels deep [4]", default=4),
    Option("palette", None, OptionType.STRING, "select palette",
           "available palettes are: size, rainbow, greyscale, monochrome, classic"),
    Option("ring-gap", None, OptionType.INT, "leave a gap of VAL pixels between rings", default=4),
)