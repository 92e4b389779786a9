import pytest

from ducview.graphopts import (
    GRAPH_OPTIONS,
    GraphFormat,
    GraphSettings,
    Palette,
    parse_palette,
    resolve_format,
    resolve_output,
)
from ducview.model import SizeType
from ducview.options import OptionSet


@pytest.mark.parametrize("name, expected", [
    ("size", Palette.SIZE),
    ("Rainbow", Palette.RAINBOW),
    ("greyscale", Palette.GREYSCALE),
    ("MONO", Palette.MONOCHROME),
    ("classic", Palette.CLASSIC),
])
def test_parse_palette(name, expected):
    assert parse_palette(name, Palette.SIZE) is expected


def test_parse_palette_keeps_current():
    assert parse_palette(None, Palette.CLASSIC) is Palette.CLASSIC
    assert parse_palette("", Palette.RAINBOW) is Palette.RAINBOW
    assert parse_palette("xyz", Palette.GREYSCALE) is Palette.GREYSCALE


@pytest.mark.parametrize("name, expected", [
    ("HTML", GraphFormat.HTML),
    ("svg", GraphFormat.SVG),
    ("Pdf", GraphFormat.PDF),
    ("png", GraphFormat.PNG),
    ("bogus", GraphFormat.PNG),
])
def test_resolve_format(name, expected):
    assert resolve_format(name) is expected


def test_resolve_output_defaults():
    assert resolve_output(None, GraphFormat.PNG) == "duc.png"
    assert resolve_output(None, GraphFormat.SVG) == "duc.svg"
    assert resolve_output(None, GraphFormat.PDF) == "duc.pdf"
    assert resolve_output(None, GraphFormat.HTML) == "duc.html"


def test_resolve_output_explicit():
    assert resolve_output("-", GraphFormat.SVG) == "-"
    assert resolve_output("out.svg", GraphFormat.PNG) == "out.svg"


def test_settings_defaults_and_size_type():
    settings = GraphSettings()
    assert settings.size == 800
    assert settings.fuzz == 0.7
    assert settings.levels == 4
    assert settings.size_type() is SizeType.ACTUAL
    assert GraphSettings(apparent=True).size_type() is SizeType.APPARENT
    assert GraphSettings(apparent=True, count=True).size_type() is SizeType.COUNT


def test_graph_options_defaults_and_parse():
    opts = OptionSet("graph")
    opts.add_options(GRAPH_OPTIONS)
    assert opts["format"] == "svg"
    assert opts["size"] == 800
    rest = opts.parse_args(["-f", "html", "--palette", "rainbow", "/home"])
    assert rest == ["/home"]
    assert resolve_format(opts["format"]) is GraphFormat.HTML
    assert parse_palette(opts["palette"], Palette.SIZE) is Palette.RAINBOW