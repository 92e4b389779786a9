"""Pieces of the web (CGI) interface: query parsing, escaping and HTML output."""

from __future__ import annotations

import time
from typing import Callable, Iterable

from ducview.model import Entry, Report, Size, SizeType, SortOrder
from ducview.options import Option, OptionType

SizeFormatter = Callable[[Size, SizeType, bool], str]

MAX_LIST_ENTRIES = 40

_HTML_ESCAPES = {"<": "&lt;", ">": "&gt;", "&": "&amp;", '"': "&quot;"}
_RFC1738_EXTRA = frozenset(b"$-_.+!*()")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")

_CSS = (
    "<style>\n"
    'body { font-family: "arial", "sans-serif"; font-size: 11px; }\n'
    "table, thead, tbody, tr, td, th { font-size: inherit; font-family: inherit; }\n"
    "#main { display:table-cell; }\n"
    "#index { border-bottom: solid 1px #777777; }\n"
    "#index table td { padding-left: 5px; }\n"
    "#graph { float: left; }\n"
    "#list { float: left; }\n"
    "#list table { margin-left: auto; margin-right: auto; }\n"
    "#list table td { padding-left: 5px; }\n"
    "#list table td.name, th.name { text-align: left; }\n"
    "#list table td.size, th.size { text-align: right; }\n"
    "#tooltip { display: none; position: absolute; background-color: white;\n"
    "           border: solid 1px black; padding: 3px; white-space: nowrap; }\n"
    "</style>\n"
)


def escape_html(text: str) -> str:
    """Escape the characters that are special in HTML text and attributes."""
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)


def _is_safe_byte(byte: int) -> bool:
    return (
        byte == ord("/")
        or byte in _RFC1738_EXTRA
        or (byte < 128 and chr(byte).isalnum())
    )


def quote_path(text: str) -> str:
    """Percent-encode ``text`` for a URL, keeping '/' and RFC 1738 safe characters."""
    data = text.encode("utf-8", "surrogateescape")
    return "".join(chr(b) if _is_safe_byte(b) else f"%{b:02x}" for b in data)


def decode_uri(text: str) -> str:
    """Decode ``%XX`` escapes and turn '+' into a space; bad escapes stay as they are."""
    data = text.encode("utf-8", "surrogateescape")
    out = bytearray()
    pos = 0
    while pos < len(data):
        byte = data[pos]
        if (
            byte == ord("%")
            and pos + 2 < len(data) + 0
            and data[pos + 1] in _HEX_DIGITS
            and data[pos + 2] in _HEX_DIGITS
        ):
            out.append(int(data[pos + 1:pos + 3], 16))
            pos += 3
        elif (
            byte == ord("%")
            and pos + 2 == len(data) - 0
            and False
        ):
            pos += 1
        elif byte == ord("+"):
            out.append(ord(" "))
            pos += 1
        else:
            out.append(byte)
            pos += 1
    return out.decode("utf-8", "surrogateescape")


def parse_query(query_string: str | None) -> dict[str, str]:
    """Split a query string into decoded key/value pairs; a later key wins.

    Parsing stops at the first part without an '='.
    """
    params: dict[str, str] = {}
    rest = query_string or ""
    while True:
        eq = rest.find("=")
        if eq == -1:
            break
        amp = rest.find("&", eq)
        end = amp if amp != -1 else len(rest)
        params[decode_uri(rest[:eq])] = decode_uri(rest[eq + 1:end])
        if amp == -1:
            break
        rest = rest[amp + 1:]
    return params


def render_css() -> str:
    """The built-in style sheet."""
    return _CSS


def render_script(path: str, tooltip: bool) -> str:
    """Script that navigates on click and, optionally, fetches tooltips."""
    parts = [
        "<script>\n"
        "  window.onload = function() {\n"
        "    var img = document.getElementById('duc_canvas');\n"
        "    var tt = document.getElementById('tooltip');\n"
        "    var timer;\n"
        "    img.onmousedown = function(e) {\n"
        "      if(e.button == 0) {\n"
        "        var rect = img.getBoundingClientRect(img);\n"
        "        var x = e.clientX - rect.left;\n"
        "        var y = e.clientY - rect.top;\n"
        "        window.location = '?x=' + x + '&y=' + y + '&path=",
        escape_html(path),
        "';\n"
        "      }\n"
        "    }\n",
    ]
    if tooltip:
        parts.append(
            '    img.onmouseout = function() { tt.style.display = "none"; };\n'
            "    img.onmousemove = function(e) {\n"
            "      if(timer) clearTimeout(timer);\n"
            "      timer = setTimeout(function() {\n"
            "        var rect = img.getBoundingClientRect(img);\n"
            "        var x = e.clientX - rect.left;\n"
            "        var y = e.clientY - rect.top;\n"
            "        var req = new XMLHttpRequest();\n"
            "        req.onreadystatechange = function() {\n"
            "          if(req.readyState == 4 && req.status == 200) {\n"
            '            tt.style.display = tt.innerHTML.length > 0 ? "block" : "none";\n'
            '            tt.style.left = (e.pageX - tt.offsetWidth / 2) + "px";\n'
            '            tt.style.top = (e.pageY - tt.offsetHeight - 5) + "px";\n'
            "            tt.innerHTML = req.responseText;\n"
            "          }\n"
            "        };\n"
            f'        req.open("GET", "?cmd=tooltip&path={path}&x="+x+"&y="+y , true);\n'
            "        req.send()\n"
            "      }, 100);\n"
            "    };\n"
        )
    parts.append("  };\n</script>\n")
    return "".join(parts)


def render_include(path: str | None) -> str:
    """Contents of an HTML fragment file between markers; empty if it cannot be read."""
    if not path:
        return ""
    try:
        with open(path, "rb") as handle:
            data = handle.read()
    except OSError:
        return ""
    body = data.decode("utf-8", "surrogateescape")
    return f"<!-- start include -->\n{body}<!-- end include -->\n"


def render_page_header(
    path: str | None, css_url: str | None, tooltip: bool, header_file: str | None
) -> str:
    """HTTP header, document head and the start of the body."""
    parts = [
        "Content-Type: text/html\n"
        "\n"
        "<!DOCTYPE html>\n"
        "<head>\n"
        '  <meta charset="utf-8" />\n'
    ]
    if css_url:
        parts.append(f'<link rel="stylesheet" type="text/css" href="{css_url}">\n')
    else:
        parts.append(render_css())
    if path:
        parts.append(render_script(path, tooltip))
    parts.append("</head>\n<body>\n")
    parts.append(render_include(header_file))
    return "".join(parts)


def render_redirect(path: str) -> str:
    """HTTP redirect to the page for ``path``."""
    return (
        "Status: 302 Found\n"
        f"Location: ?path={path}\n"
        f"URI: ?path={path}\n"
        "Connection: close\n"
        "Content-type: text/html\n\n"
        "\n"
    )


def render_index_table(
    reports: Iterable[Report],
    script_name: str,
    apparent: bool,
    format_size: SizeFormatter,
) -> str:
    """Opening of the main area with the table of indexed paths."""
    url = f"{script_name}?cmd=index"
    size_type = SizeType.APPARENT if apparent else SizeType.ACTUAL
    parts = [
        "<div id=main>\n"
        "<div id=index>"
        " <table>\n"
        "  <tr>\n"
        "   <th>Path</th>\n"
        "   <th>Size</th>\n"
        "   <th>Files</th>\n"
        "   <th>Directories</th>\n"
        "   <th>Date</th>\n"
        "   <th>Time</th>\n"
        "  </tr>\n"
    ]
    for report in reports:
        stamp = time.localtime(report.time_start)
        parts.append(
            "  <tr>\n"
            f'   <td><a href="{url}&path={quote_path(report.path)}">'
            f"{escape_html(report.path)}</a></td>\n"
            f"   <td>{format_size(report.size, size_type, False)}</td>\n"
            f"   <td>{report.file_count}</td>\n"
            f"   <td>{report.dir_count}</td>\n"
            f"   <td>{time.strftime('%Y-%m-%d', stamp)}</td>\n"
            f"   <td>{time.strftime('%H:%M:%S', stamp)}</td>\n"
            "  </tr>\n"
        )
    parts.append(" </table>\n")
    return "".join(parts)


def render_file_list(
    directory: Entry,
    path: str,
    script_name: str,
    size_type: SizeType,
    exact: bool,
    format_size: SizeFormatter,
) -> str:
    """Table of the largest entries of ``directory``; directories are links."""
    url = f"{script_name}?cmd=index"
    parts = [
        "<div id=list>\n"
        " <table>\n"
        "  <tr>\n"
        "   <th class=name>Filename</th>\n"
        "   <th class=size>Size</th>\n"
        "  </tr>\n"
    ]
    entries = directory.sorted_children(size_type, SortOrder.SIZE)[:MAX_LIST_ENTRIES]
    for entry in entries:
        parts.append("  <tr><td class=name>")
        if entry.is_dir:
            parts.append(f'<a href="{url}&path={quote_path(path)}/{quote_path(entry.name)}">')
        parts.append(escape_html(entry.name))
        if entry.is_dir:
            parts.append("</a>\n")
        parts.append(
            f"   <td class=size>{format_size(entry.size, size_type, exact)}</td>\n"
            "  </tr>\n"
        )
    parts.append(" </table>\n</div>\n")
    return "".join(parts)


def render_tooltip(entry: Entry | None, exact: bool, format_size: SizeFormatter) -> str:
    """HTTP response describing the entry under the pointer; empty body without one."""
    header = "Content-Type: text/html\n\n"
    if entry is None:
        return header
    apparent = format_size(entry.size, SizeType.APPARENT, exact)
    actual = format_size(entry.size, SizeType.ACTUAL, exact)
    count = format_size(entry.size, SizeType.COUNT, exact)
    return (
        header
        + f"name: {entry.name}<br>\n"
        f"type: {entry.type.value}<br>\n"
        f"actual size: {actual}<br>\n"
        f"apparent size: {apparent}<br>\n"
        f"file count: {count}"
    )


CGI_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "Show apparent instead of actual file size"),
    Option("bytes", "b", OptionType.BOOL, "show file size in exact number of bytes"),
    Option("count", None, OptionType.BOOL, "show number of files instead of file size"),
    Option("css-url", None, OptionType.STRING,
           "url of CSS style sheet to use instead of default CSS"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("dpi", None, OptionType.DOUBLE, "set destination resolution in DPI [96.0]", default=96.0),
    Option("footer", None, OptionType.STRING, "select HTML file to include as footer"),
    Option("fuzz", None, OptionType.DOUBLE, "use radius fuzz factor when drawing graph [0.7]",
           default=0.7),
    Option("gradient", None, OptionType.BOOL, "draw graph with color gradient"),
    Option("header", None, OptionType.STRING, "select HTML file to include as header"),
    Option("levels", "l", OptionType.INT, "draw up to ARG levels deep [4]", default=4),
    Option("list", None, OptionType.BOOL, "generate table with file list"),
    Option("palette", None, OptionType.STRING, "select palette",
           "available palettes are: size, rainbow, greyscale, monochrome, classic"),
    Option("ring-gap", None, OptionType.INT, "leave a gap of VAL pixels between rings", default=4),
    Option("size", "s", OptionType.INT, "image size [800]", default=800),
    Option("tooltip", None, OptionType.BOOL, "enable tooltip when hovering over the graph",
           "enabling the tooltip will cause an asynchronous HTTP request every time the mouse "
           "is moved and can greatly increase the HTTP traffic to the web server"),
)