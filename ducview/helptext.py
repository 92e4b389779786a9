"""Help, manual and version text for the command-line interface."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from ducview.options import Command, Option, OptionType

DEFAULT_WIDTH = 80
_DESCR_COLUMN = 29

GLOBAL_OPTIONS = (
    Option("debug", None, OptionType.BOOL, "increase verbosity to debug level"),
    Option("help", "h", OptionType.BOOL, "show help"),
    Option("quiet", "q", OptionType.BOOL, "quiet mode, do not print any warning"),
    Option("verbose", "v", OptionType.BOOL, "increase verbosity"),
    Option("version", None, OptionType.BOOL, "output version information and exit"),
)

HELP_OPTIONS = (
    Option("all", "a", OptionType.BOOL, "show complete help for all commands"),
)

_HELP_TRAILER = (
    "\n"
    "Use 'duc help <subcommand>' or 'duc <subcommand> -h' for a complete list of all\n"
    "options and detailed description of the subcommand.\n"
    "\n"
    "Use 'duc help --all' for a complete list of all options for all subcommands.\n"
)


def find_command(commands: Iterable[Command], name: str) -> Command | None:
    """Return the command called ``name``, or None."""
    return next((command for command in commands if command.name == name), None)


def select_command(
    commands: Sequence[Command], argv: Sequence[str], environ: Mapping[str, str]
) -> Command:
    """Pick the subcommand named by ``argv[0]`` (arguments after the program name).

    Without a known name the CGI command is chosen when running under a web
    server, and the help command otherwise.
    """
    if argv:
        command = find_command(commands, argv[0])
        if command is not None:
            return command
    fallback = "cgi" if "GATEWAY_INTERFACE" in environ else "help"
    command = find_command(commands, fallback)
    if command is None:
        raise LookupError(f"no '{fallback}' command available")
    return command


def wrap_indented(text: str, pos: int, indent: int, max_width: int) -> str:
    """Word-wrap ``text`` starting at column ``pos``; new lines start at ``indent``."""
    words = text.split()
    if text[:1].isspace():
        words.insert(0, "")
    out: list[str] = []
    for word in words:
        length = len(word)
        if pos + length >= max_width:
            out.append("\n" + " " * indent)
            pos = indent
        out.append(word)
        pos += length
        if pos < max_width:
            out.append(" ")
            pos += 1
    return "".join(out)


def format_options(
    options: Iterable[Option], show_long: bool, width: int = DEFAULT_WIDTH
) -> str:
    """One line per option, with the long description wrapped when asked."""
    lines: list[str] = []
    for option in options:
        short = f"-{option.shortopt}," if option.shortopt else ""
        long_name = f"{option.longopt}=VAL" if option.takes_value else option.longopt
        line = f"  {short[:4]:<4} --{long_name[:19]:<20}{option.descr_short}"
        if show_long and option.descr_long:
            line += ". " + wrap_indented(
                option.descr_long,
                _DESCR_COLUMN + len(option.descr_short),
                _DESCR_COLUMN,
                width - 2,
            )
        lines.append(line + "\n")
    return "".join(lines)


def format_command_help(
    command: Command, global_options: Iterable[Option], width: int = DEFAULT_WIDTH
) -> str:
    """Full help for one subcommand."""
    parts = [f"usage: duc {command.name} {command.usage}\n\n"]
    if command.descr_short:
        parts.append(f"{command.descr_short}.\n\n")
    parts.append(f"Options for the command '{command.name}':\n")
    parts.append(format_options(command.options, True, width))
    parts.append("\nGlobal options:\n")
    parts.append(format_options(global_options, True, width))
    if command.descr_long:
        parts.append("\n" + command.descr_long)
    return "".join(parts)


def format_command_list(
    commands: Iterable[Command],
    global_options: Iterable[Option],
    show_all: bool,
    width: int = DEFAULT_WIDTH,
) -> str:
    """Overview of all visible subcommands."""
    parts = ["usage: duc <cmd> [options] [args]\n\nAvailable subcommands:\n\n"]
    for command in commands:
        if command.hidden:
            continue
        if show_all:
            parts.append(f"duc {command.name} {command.usage}: {command.descr_short}\n\n")
            parts.append(format_options(command.options, False, width))
            parts.append("\n")
        else:
            parts.append(f"  {command.name[:10]:<10}: {command.descr_short}\n")
    if not show_all:
        parts.append("\nGlobal options:\n")
        parts.append(format_options(global_options, True, width))
        parts.append(_HELP_TRAILER)
    return "".join(parts)


def _format_options_manual(options: Iterable[Option]) -> str:
    parts: list[str] = []
    for option in options:
        parts.append("  * ")
        if option.shortopt:
            parts.append(f"`-{option.shortopt}`, ")
        if option.takes_value:
            parts.append(f"`--{option.longopt}=VAL`:")
        else:
            parts.append(f"`--{option.longopt}`:")
        parts.append("\n")
        parts.append(f"    {option.descr_short}")
        if option.descr_long:
            parts.append(f". {option.descr_long}\n")
        parts.append("\n\n")
    return "".join(parts)


def format_manual(commands: Iterable[Command], global_options: Iterable[Option]) -> str:
    """Markdown reference of all options of all visible subcommands."""
    parts = [
        "### Global options\n\n",
        "These options apply to all Duc subcommands:\n\n",
        _format_options_manual(global_options),
    ]
    for command in commands:
        if command.hidden:
            continue
        parts.append(f"### duc {command.name}\n\n")
        if command.descr_long:
            parts.append(f"{command.descr_long}\n\n")
        parts.append(f"Options for command `duc {command.name} {command.usage}`:\n\n")
        parts.append(_format_options_manual(command.options))
    return "".join(parts)


def format_version(version: str, features: Iterable[str], backend: str) -> str:
    """Version line and the list of built-in features."""
    feature_text = "".join(f"{feature} " for feature in features)
    return f"duc version: {version}\noptions: {feature_text}{backend}\n"