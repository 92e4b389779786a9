# ducview

`ducview` is a library for presenting a disk usage index: the apparent
sizes, actual disk usage and file counts of a directory tree, shown as
terminal listings, JSON or XML documents, pieces of a CGI web page, a
curses browser, or driven through the input handling of a graphical
viewer. It also provides the option, configuration-file and help-text
handling that a command-line front end for such an index needs.

You hand the library the data: a tree of `Entry` objects and a list of
`Report` summaries. Functions that show sizes take a formatter callable
from you, so you decide how sizes and numbers are written.

## Modules

### `ducview.options`

- `Option` describes one option: long name, optional one-letter short
  name, `OptionType` (`BOOL`, `INT`, `DOUBLE`, `STRING`, `FUNC`),
  descriptions and a default. A `FUNC` option passes each value to its
  `callback`, or collects the values in a list when it has none.
- `Command` groups a subcommand's name, usage, descriptions and options.
- `OptionSet(section)` holds options and their current values in
  `values` (also readable as `option_set[name]`).
  - `add_options(options)` registers options with their defaults; at most
    64 are kept.
  - `handle(shortopt, longopt, value)` applies one option. Integer and
    floating-point values are read from their leading number, as `atoi` and
    `atof` do. An unknown option, or a missing value, raises `OptionError`.
  - `read(path)` applies a configuration file. Lines before any section,
    in `[global]`, or in the section named like the set are used; each line
    is `name` or `name value`, and `#` starts a comment. Unknown options are
    reported on standard error and skipped. A file that cannot be opened
    raises `OSError`.
  - `parse_args(argv)` applies command-line options and returns the
    remaining arguments. It accepts `--name`, `--name=value`,
    `--name value`, unambiguous abbreviations of long names, grouped short
    options (`-ab`), `-lVALUE` and `-l VALUE`; `--` ends option
    processing. Errors raise `OptionError`.

### `ducview.model`

- `Size(apparent, actual, count)` with `get(size_type)`.
- `Entry(name, type, size, children)` – a file or directory. Children get
  their `parent` set; `path` joins the names up to the root;
  `sorted_children(size_type, sort)` orders them largest first or by name.
- `Report` – the summary of one indexed path (size, file and directory
  counts, start and stop time).
- `FileType` (with a one-character `char` indicator), `SizeType`,
  `SortOrder`.
- `size_type_for(count, apparent)` – file count wins over apparent size,
  which wins over actual size.
- `format_report_table(reports, apparent, format_size, format_number)` –
  the table of indexed paths with date, time, counts and size.

### `ducview.graphopts`

- `GraphFormat` (`PNG`, `SVG`, `PDF`, `HTML`) and `resolve_format(name)`,
  which matches case-insensitively and falls back to `PNG`.
- `resolve_output(output, graph_format)` – the given output name, or
  `duc.png`, `duc.svg`, `duc.pdf` or `duc.html`.
- `Palette` and `parse_palette(name, current)`, which picks a palette by
  the first letter of its name.
- `GraphSettings` – size, dpi, fuzz, levels, palette, ring gap, gradient
  and the size type to draw.

### `ducview.indexing`

- `IndexRequest` and `build_request(values, excludes, fs_includes,
  fs_excludes)` turn parsed option values into exclusions, depth and owner
  limits, and `IndexFlags`.
- `open_flags(values)` gives the `OpenFlags` for writing an index:
  read-write and compressed, plus `FORCE` or minus `COMPRESS` as asked.
- `ProgressMeter(format_size, format_number).render(report)` returns a
  progress line with a bouncing `#` marker.
- `summary_message(report, apparent, actual, duration)` – the message
  written after a path has been indexed.

### `ducview.helptext`

- `find_command(commands, name)` and `select_command(commands, argv,
  environ)`, which falls back to `cgi` under a web server
  (`GATEWAY_INTERFACE` set) and to `help` otherwise.
- `format_options`, `format_command_help`, `format_command_list`,
  `format_manual` (Markdown) and `format_version`; `wrap_indented` does
  the word wrapping of long descriptions.
- `GLOBAL_OPTIONS` and `HELP_OPTIONS`.

### `ducview.export`

- `dump_json(root, path, min_size, apparent, exclude_files)` and
  `dump_xml(...)` write the tree below `root`, largest entries first.
  Entries smaller than `min_size` are left out; `exclude_files` keeps
  directories only.
- `escape_json_string(text)` and `escape_xml(text)`.

### `ducview.cgi`

- `parse_query(query_string)` and `decode_uri(text)` decode a query
  string; parsing stops at the first part without `=`, and a later key
  wins.
- `escape_html(text)` and `quote_path(text)`.
- `render_page_header`, `render_css`, `render_script`, `render_include`,
  `render_redirect`, `render_index_table`, `render_file_list` (at most 40
  entries, directories as links) and `render_tooltip` produce the parts of
  the page, including their HTTP headers.

### `ducview.listing`

- `ListingStyle` – apparent/count sizes, exact bytes, classification
  marks, colours, tree drawing (UTF-8 or ASCII), full paths, relative-size
  bars, directories only, depth, name sort and terminal width.
- `render_listing(directory, style, format_size)` and
  `render_directory_only(path, directory, style, format_size)`.
- `string_width(text)` – display width on a terminal.

### `ducview.browser`

- `Browser(directory, rows, cols)` keeps the cursor and view settings.
  `handle_key(key)` moves the cursor, toggles settings, enters and leaves
  directories, and returns `"quit"`, `"help"`, `"open"` or `"resize"` when
  the caller has to act. `header`, `footer` and `entry_line` give the
  screen texts.
- `Browser.run(stdscr, format_size, format_number)` runs the interactive
  loop on a curses window. Help is shown with `less`, and `o` opens the
  selected entry with `xdg-open` (see `open_command`).
- `escape_control(name)` and `graph_bar(size, size_max, cols)`.

### `ducview.viewer`

- `ViewerState` – the state of a graphical sunburst viewer: directory,
  depth, size type, fuzz, gradient, ring gap, palette and pointer position.
  `handle_key`, `handle_button`, `handle_scroll` and `clamp_levels` apply
  user input; a left click descends into the directory that the
  `find_spot` callable you pass returns.
- `dpi_from_display(width_px, width_mm)`.

## Examples

```python
from ducview.cgi import decode_uri, escape_html

escape_html('<a href="x">')   # '&lt;a href=&quot;x&quot;&gt;'
decode_uri("my%20dir+name")   # 'my dir name'
```

```python
from ducview.options import Option, OptionSet, OptionType

options = OptionSet("ls")
options.add_options([
    Option("bytes", "b", OptionType.BOOL, "show exact sizes"),
    Option("levels", "l", OptionType.INT, "depth", default=4),
])
rest = options.parse_args(["-b", "--levels=2", "/home"])
# rest == ["/home"], options["bytes"] is True, options["levels"] == 2
```

```python
from ducview.export import dump_json
from ducview.listing import ListingStyle, render_listing
from ducview.model import Entry, FileType, Size

root = Entry("/data", FileType.DIRECTORY, Size(300, 400, 2), [
    Entry("a.bin", FileType.REGULAR, Size(200, 300, 1)),
    Entry("b.txt", FileType.REGULAR, Size(100, 100, 1)),
])

def format_size(size, size_type, exact=False):
    return str(size.get(size_type))

print(render_listing(root, ListingStyle(classify=True), format_size))
print(dump_json(root, "/data"))
```

```python
import curses
from ducview.browser import Browser

browser = Browser(root)
curses.wrapper(browser.run, format_size, str)
```

## What the package does not do

- It does not scan the file system and does not store or read an index
  database; the trees and reports come from you.
- It does not draw sunburst graphs. `ducview.graphopts` and
  `ducview.viewer` hold the settings and input handling, not the
  rendering, and the CGI helpers do not include the graph image.
- It does not format sizes in human-readable units; you supply the
  formatter.
- It installs no command-line program. The option, help and CGI pieces
  are there to build one.

## Running the tests

Install the package with its `test` extra and run `pytest` from the
project directory.