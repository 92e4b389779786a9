"""Settings for drawing sunburst graphs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ducview.model import SizeType, size_type_for
from ducview.options import Option, OptionType

DEFAULT_FORMAT = "svg"


class GraphFormat(Enum):
    """Output format with its default file name."""

    PNG = "duc.png"
    SVG = "duc.svg"
    PDF = "duc.pdf"
    HTML = "duc.html"

    @property
    def default_output(self) -> str:
        return self.value


class Palette(Enum):
    SIZE = 0
    RAINBOW = 1
    GREYSCALE = 2
    MONOCHROME = 3
    CLASSIC = 4


_PALETTE_LETTERS = {
    "s": Palette.SIZE,
    "r": Palette.RAINBOW,
    "g": Palette.GREYSCALE,
    "m": Palette.MONOCHROME,
    "c": Palette.CLASSIC,
}


def parse_palette(name: str | None, current: Palette) -> Palette:
    """Choose a palette by the first letter of its name; keep ``current`` otherwise."""
    if not name:
        return current
    return _PALETTE_LETTERS.get(name[0].lower(), current)


def resolve_format(name: str) -> GraphFormat:
    """Map a format name, case-insensitively; anything unknown means PNG."""
    lowered = name.lower()
    for graph_format in (GraphFormat.HTML, GraphFormat.SVG, GraphFormat.PDF):
        if lowered == graph_format.name.lower():
            return graph_format
    return GraphFormat.PNG


def resolve_output(output: str | None, graph_format: GraphFormat) -> str:
    """The output file name; ``-`` stands for standard output."""
    return output if output is not None else graph_format.default_output


@dataclass
class GraphSettings:
    """Drawing parameters for a graph."""

    size: int = 800
    dpi: float = 96.0
    fuzz: float = 0.7
    levels: int = 4
    palette: Palette = Palette.SIZE
    ring_gap: int = 4
    gradient: bool = False
    count: bool = False
    apparent: bool = False
    exact_bytes: bool = False

    def size_type(self) -> SizeType:
        return size_type_for(self.count, self.apparent)


GRAPH_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "Show apparent instead of actual file size"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("count", None, OptionType.BOOL, "show number of files instead of file size"),
    Option("dpi", None, OptionType.DOUBLE, "set destination resolution in DPI [96.0]", default=96.0),
    Option("format", "f", OptionType.STRING, "select output format <svg|html> [svg]",
           default=DEFAULT_FORMAT),
    Option("fuzz", None, OptionType.DOUBLE, "use radius fuzz factor when drawing graph [0.7]",
           default=0.7),
    Option("gradient", None, OptionType.BOOL, "draw graph with color gradient"),
    Option("levels", "l", OptionType.INT, "draw up to ARG levels deep [4]", default=4),
    Option("output", "o", OptionType.STRING, "output file name [duc.png]"),
    Option("palette", None, OptionType.STRING, "select palette",
           "available palettes are: size, rainbow, greyscale, monochrome, classic"),
    Option("ring-gap", None, OptionType.INT, "leave a gap of VAL pixels between rings", default=4),
    Option("size", "s", OptionType.INT, "image size [800]", default=800),
)