"""JSON and XML dumps of an indexed directory tree."""

from __future__ import annotations

from ducview.model import Entry, SizeType, SortOrder
from ducview.options import Option, OptionType

_JSON_ESCAPES = {
    '"': '\\"',
    "\\": "\\\\",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}

_XML_ESCAPES = {
    "<": "&lt;",
    ">": "&gt;",
    "&": "&amp;",
    '"': "&quot;",
    "\t": "\t",
    "\n": "\n",
    "\r": "\r",
}


def escape_json_string(text: str) -> str:
    """Escape ``text`` for use inside a JSON string literal."""
    out = []
    for char in text:
        if char in _JSON_ESCAPES:
            out.append(_JSON_ESCAPES[char])
        elif ord(char) < 32:
            out.append(f"\\u{ord(char):04x}")
        else:
            out.append(char)
    return "".join(out)


def escape_xml(text: str) -> str:
    """Escape ``text`` for an XML attribute value."""
    out = []
    for char in text:
        if char in _XML_ESCAPES:
            out.append(_XML_ESCAPES[char])
        elif ord(char) < 32:
            out.append(f"#x{ord(char):02x}")
        else:
            out.append(char)
    return "".join(out)


def _size_type(apparent: bool) -> SizeType:
    return SizeType.APPARENT if apparent else SizeType.ACTUAL


def _json_children(
    directory: Entry, depth: int, min_size: int, size_type: SizeType, exclude_files: bool
) -> str:
    pad = " " * depth
    inner = " " * (depth + 2)
    items: list[str] = []
    for entry in directory.sorted_children(SizeType.ACTUAL, SortOrder.SIZE):
        size = entry.size.get(size_type)
        if entry.is_dir and size >= min_size:
            children = _json_children(entry, depth + 4, min_size, size_type, exclude_files)
            items.append(
                f"{pad}{{\n"
                f'{inner}"name": "{escape_json_string(entry.name)}",\n'
                f'{inner}"count": {entry.size.count},\n'
                f'{inner}"size_apparent": {entry.size.apparent},\n'
                f'{inner}"size_actual": {entry.size.actual},\n'
                f'{inner}"children": [\n'
                f"{children}\n"
                f"{inner}]\n"
                f"{pad}}}"
            )
        elif not exclude_files and size >= min_size:
            items.append(
                f"{pad}{{\n"
                f'{inner}"name": "{escape_json_string(entry.name)}",\n'
                f'{inner}"size_apparent": {entry.size.apparent},\n'
                f'{inner}"size_actual": {entry.size.actual}\n'
                f"{pad}}}"
            )
    return ",\n".join(items)


def dump_json(
    root: Entry, path: str, min_size: float = 0, apparent: bool = False,
    exclude_files: bool = False,
) -> str:
    """The tree below ``root`` as JSON, largest entries first.

    Entries smaller than ``min_size`` (apparent or actual size) are left out;
    ``exclude_files`` keeps directories only.
    """
    size_type = _size_type(apparent)
    children = _json_children(root, 4, int(min_size), size_type, exclude_files)
    return (
        "{\n"
        f'  "name": "{escape_json_string(path)}",\n'
        f'  "count": {root.size.count},\n'
        f'  "size_apparent": {root.size.apparent},\n'
        f'  "size_actual": {root.size.actual},\n'
        '  "children": [\n'
        f"{children}\n"
        "  ]\n"
        "}\n"
    )


def _xml_children(
    directory: Entry, depth: int, min_size: int, size_type: SizeType,
    exclude_files: bool, out: list[str],
) -> None:
    pad = " " * depth
    for entry in directory.sorted_children(SizeType.ACTUAL, SortOrder.SIZE):
        size = entry.size.get(size_type)
        name = escape_xml(entry.name)
        if entry.is_dir and size >= min_size:
            out.append(
                f'{pad}<ent type="dir" name="{name}" size_apparent="{entry.size.apparent}" '
                f'size_actual="{entry.size.actual}" count="{entry.size.count}">\n'
            )
            _xml_children(entry, depth + 1, min_size, size_type, exclude_files, out)
            out.append(f"{pad}</ent>\n")
        elif not exclude_files and size >= min_size:
            out.append(
                f'{pad}<ent name="{name}" size_apparent="{entry.size.apparent}" '
                f'size_actual="{entry.size.actual}" />\n'
            )


def dump_xml(
    root: Entry, path: str, min_size: float = 0, apparent: bool = False,
    exclude_files: bool = False,
) -> str:
    """The tree below ``root`` as an XML document, largest entries first."""
    out = [
        '<?xml version="1.0" encoding="UTF-8"?>\n',
        f'<duc root="{escape_xml(path)}" size_apparent="{root.size.apparent}" '
        f'size_actual="{root.size.actual}" count="{root.size.count}">\n',
    ]
    _xml_children(root, 1, int(min_size), _size_type(apparent), exclude_files, out)
    out.append("</duc>\n")
    return "".join(out)


JSON_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "interpret min_size/-s value as apparent size"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("exclude-files", "x", OptionType.BOOL,
           "exclude file from json output, only include directories"),
    Option("min_size", "s", OptionType.DOUBLE, "specify min size for files or directories",
           default=0.0),
)

XML_OPTIONS = (
    Option("apparent", "a", OptionType.BOOL, "interpret min_size/-s value as apparent size"),
    Option("database", "d", OptionType.STRING, "select database file to use [~/.duc.db]"),
    Option("exclude-files", "x", OptionType.BOOL,
           "exclude file from xml output, only include directories"),
    Option("min_size", "s", OptionType.DOUBLE, "specify min size for files or directories",
           default=0.0),
)