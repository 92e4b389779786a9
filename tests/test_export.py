import json
import xml.etree.ElementTree as ET

from ducview.export import dump_json, dump_xml, escape_json_string, escape_xml
from ducview.model import Entry, FileType, Size


def _tree():
    return Entry(
        "root",
        FileType.DIRECTORY,
        Size(600, 700, 3),
        children=[
            Entry("small", FileType.REGULAR, Size(10, 100, 1)),
            Entry(
                "sub",
                FileType.DIRECTORY,
                Size(500, 512, 2),
                children=[Entry('a"b<c>', FileType.REGULAR, Size(500, 512, 1))],
            ),
            Entry("big", FileType.REGULAR, Size(90, 88, 1)),
        ],
    )


def test_escape_json_round_trip():
    text = 'quote " back \\ nl \n tab \t'
    assert json.loads('"' + escape_json_string(text) + '"') == text


def test_escape_xml_entities():
    assert escape_xml('<a&b>"') == "&lt;a&amp;b&gt;&quot;"
    assert escape_xml("x\ty") == "x\ty"
    assert escape_xml("\x01") == "#x01"


def test_dump_json_structure():
    data = json.loads(dump_json(_tree(), "/r"))
    assert data["name"] == "/r"
    assert data["count"] == 3
    assert data["size_actual"] == 700
    assert [c["name"] for c in data["children"]] == ["sub", "small", "big"]
    sub = data["children"][0]
    assert sub["count"] == 2
    assert sub["children"][0]["name"] == 'a"b<c>'
    assert "children" not in data["children"][1]


def test_dump_json_layout():
    out = dump_json(_tree(), "/r")
    assert '\n    {\n      "name": "sub",\n' in out
    assert out.endswith("  ]\n}\n")


def test_dump_json_min_size_actual_and_apparent():
    actual = json.loads(dump_json(_tree(), "/r", 100))
    assert [c["name"] for c in actual["children"]] == ["sub", "small"]
    apparent = json.loads(dump_json(_tree(), "/r", 100, apparent=True))
    assert [c["name"] for c in apparent["children"]] == ["sub"]


def test_dump_json_exclude_files():
    data = json.loads(dump_json(_tree(), "/r", exclude_files=True))
    assert [c["name"] for c in data["children"]] == ["sub"]
    assert data["children"][0]["children"] == []


def test_dump_xml_structure():
    out = dump_xml(_tree(), "/r")
    assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n')
    root = ET.fromstring(out.encode("utf-8"))
    assert root.tag == "duc"
    assert root.get("root") == "/r"
    assert root.get("size_apparent") == "600"
    names = [e.get("name") for e in root]
    assert names == ["sub", "small", "big"]
    sub = root[0]
    assert sub.get("type") == "dir"
    assert sub.get("count") == "2"
    assert sub[0].get("name") == 'a"b<c>'
    assert root[2].get("size_actual") == "88"


def test_dump_xml_filters():
    root = ET.fromstring(dump_xml(_tree(), "/r", 100, apparent=True).encode("utf-8"))
    assert [e.get("name") for e in root] == ["sub"]
    root = ET.fromstring(dump_xml(_tree(), "/r", exclude_files=True).encode("utf-8"))
    assert [e.get("name") for e in root] == ["sub"]
    assert len(root[0]) == 0


def test_dump_xml_indentation_follows_depth():
    lines = dump_xml(_tree(), "/r").splitlines()
    nested = [line for line in lines if 'a"b' in line or "&quot;" in line]
    assert nested and nested[0].startswith("  <ent ")
    assert lines[-1] == "</duc>"