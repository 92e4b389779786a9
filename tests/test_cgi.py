import re

import pytest

from ducview.cgi import (
    MAX_LIST_ENTRIES,
    decode_uri,
    escape_html,
    parse_query,
    quote_path,
    render_css,
    render_file_list,
    render_include,
    render_index_table,
    render_page_header,
    render_redirect,
    render_script,
    render_tooltip,
)
from ducview.model import Entry, FileType, Report, Size, SizeType


def fmt(size, size_type, exact):
    return f"{size.get(size_type)}{'!' if exact else ''}"


def test_escape_html_special_characters():
    assert escape_html('<a&b>"') == "&lt;a&amp;b&gt;&quot;"
    assert escape_html("plain text") == "plain text"


def test_quote_path_keeps_safe_characters():
    safe = "/$-_.+!*()abcXYZ09"
    assert quote_path(safe) == safe


def test_quote_path_encodes_space_lowercase_hex():
    assert quote_path("/a b") == "/a%20b"
    assert quote_path("é") == "%c3%a9"


@pytest.mark.parametrize("text", ["/home/user", "a b&c=d", "ünïcode/ñ", "100%", "x?y#z"])
def test_quote_decode_round_trip(text):
    assert decode_uri(quote_path(text)) == text


def test_decode_plus_becomes_space():
    assert decode_uri("a+b") == "a b"


@pytest.mark.parametrize("text", ["%zz", "%4", "%", "abc%g1"])
def test_decode_keeps_bad_escapes(text):
    assert decode_uri(text) == text


def test_decode_uppercase_hex():
    assert decode_uri("%2F%2f") == "//"


def test_parse_query_basic():
    assert parse_query("path=%2Fhome&x=10") == {"path": "/home", "x": "10"}


def test_parse_query_last_value_wins():
    assert parse_query("a=1&a=2")["a"] == "2"


def test_parse_query_stops_without_equals():
    assert parse_query("a=1&b") == {"a": "1"}
    assert parse_query("") == {}
    assert parse_query(None) == {}


def test_render_css_is_style_block():
    css = render_css()
    assert css.startswith("<style>\n")
    assert css.endswith("</style>\n")


def test_render_script_escapes_path_and_toggles_tooltip():
    plain = render_script("/a<b", False)
    assert "&path=/a&lt;b';" in plain
    assert "XMLHttpRequest" not in plain
    with_tip = render_script("/a<b", True)
    assert "?cmd=tooltip&path=/a<b&x=" in with_tip
    assert with_tip.endswith("  };\n</script>\n")


def test_render_include_missing_file(tmp_path):
    assert render_include(str(tmp_path / "missing.html")) == ""
    assert render_include(None) == ""


def test_render_include_wraps_content(tmp_path):
    target = tmp_path / "header.html"
    target.write_text("<p>hi</p>\n")
    out = render_include(str(target))
    assert out == "<!-- start include -->\n<p>hi</p>\n<!-- end include -->\n"


def test_render_page_header_default_css():
    out = render_page_header(None, None, False, None)
    assert out.startswith("Content-Type: text/html\n\n<!DOCTYPE html>\n")
    assert render_css() in out
    assert "<script>" not in out
    assert out.endswith("</head>\n<body>\n")


def test_render_page_header_css_url_and_script(tmp_path):
    out = render_page_header("/data", "style.css", True, None)
    assert 'href="style.css"' in out
    assert "<style>" not in out
    assert render_script("/data", True) in out


def test_render_redirect():
    out = render_redirect("/x")
    assert out.startswith("Status: 302 Found\n")
    assert "Location: ?path=/x\n" in out
    assert "URI: ?path=/x\n" in out


def _report(path):
    return Report(path=path, size=Size(apparent=5, actual=8, count=2),
                  file_count=3, dir_count=1, time_start=0.0)


def test_render_index_table_rows():
    out = render_index_table([_report("/a b"), _report("/c")], "/cgi", False, fmt)
    assert out.startswith("<div id=main>\n<div id=index> <table>\n")
    assert out.endswith(" </table>\n")
    assert '<a href="/cgi?cmd=index&path=/a%20b">/a b</a>' in out
    assert out.count("   <td>8</td>\n") == 2
    assert re.search(r"<td>\d{4}-\d{2}-\d{2}</td>", out)
    assert re.search(r"<td>\d{2}:\d{2}:\d{2}</td>", out)


def test_render_index_table_apparent():
    out = render_index_table([_report("/c")], "/cgi", True, fmt)
    assert "   <td>5</td>\n" in out


def test_render_file_list_order_and_links():
    root = Entry("/r", FileType.DIRECTORY, children=[
        Entry("small", size=Size(actual=1)),
        Entry("sub dir", FileType.DIRECTORY, Size(actual=50)),
    ])
    out = render_file_list(root, "/r", "/cgi", SizeType.ACTUAL, True, fmt)
    assert out.index("sub dir") < out.index("small")
    assert '<a href="/cgi?cmd=index&path=/r/sub%20dir">sub dir</a>\n' in out
    assert "<td class=name>small   <td class=size>1!</td>" in out


def test_render_file_list_limited():
    root = Entry("/r", FileType.DIRECTORY,
                 children=[Entry(f"f{i}", size=Size(actual=i)) for i in range(60)])
    out = render_file_list(root, "/r", "/cgi", SizeType.ACTUAL, False, fmt)
    assert out.count("<td class=name>") == MAX_LIST_ENTRIES
    assert "f59" in out
    assert "<td class=name>f0   " not in out


def test_render_tooltip_without_entry():
    assert render_tooltip(None, False, fmt) == "Content-Type: text/html\n\n"


def test_render_tooltip_with_entry():
    entry = Entry("doc", FileType.REGULAR, Size(apparent=5, actual=8, count=1))
    out = render_tooltip(entry, False, fmt)
    assert out.startswith("Content-Type: text/html\n\nname: doc<br>\n")
    assert "actual size: 8<br>\n" in out
    assert "apparent size: 5<br>\n" in out
    assert out.endswith("file count: 1")