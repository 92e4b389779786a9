"""Option tables, configuration files and command-line parsing."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Mapping, Sequence

MAX_OPTIONS = 64

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class OptionType(Enum):
    """Kind of value an option carries."""

    BOOL = "bool"
    INT = "int"
    DOUBLE = "double"
    STRING = "string"
    FUNC = "func"


@dataclass(frozen=True)
class Option:
    """One configurable option.

    A FUNC option hands its value to ``callback``; without a callback its
    values are collected in a list.
    """

    longopt: str
    shortopt: str | None = None
    type: OptionType = OptionType.BOOL
    descr_short: str = ""
    descr_long: str | None = None
    default: Any = None
    callback: Callable[[str], None] | None = None

    @property
    def takes_value(self) -> bool:
        return self.type is not OptionType.BOOL


@dataclass
class Command:
    """A subcommand with its options and descriptions."""

    name: str
    main: Callable[..., int] | None = None
    init: Callable[..., int] | None = None
    descr_short: str = ""
    descr_long: str | None = None
    usage: str = ""
    options: tuple[Option, ...] = ()
    hidden: bool = False


class OptionError(ValueError):
    """Raised for unknown options or badly formed option values."""


def _atoi(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def _atof(text: str) -> float:
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


class OptionSet:
    """A collection of options for one configuration section."""

    def __init__(self, section: str) -> None:
        self.section = section
        self.options: list[Option] = []
        self.values: dict[str, Any] = {}

    def __getitem__(self, name: str) -> Any:
        return self.values[name]

    def add_options(self, options: Iterable[Option]) -> None:
        """Register options and their defaults; at most MAX_OPTIONS are kept."""
        for option in options:
            if len(self.options) >= MAX_OPTIONS:
                continue
            self.options.append(option)
            if option.type is OptionType.BOOL:
                self.values[option.longopt] = bool(option.default)
            elif option.type is OptionType.FUNC:
                if option.callback is None:
                    self.values[option.longopt] = []
            else:
                self.values[option.longopt] = option.default

    def _find(self, shortopt: str | None, longopt: str | None) -> Option | None:
        for option in self.options:
            if shortopt and shortopt == option.shortopt:
                return option
            if longopt and longopt == option.longopt:
                return option
        return None

    def handle(self, shortopt: str | None, longopt: str | None, value: str | None) -> None:
        """Apply one option, found by short or long name, with its value."""
        option = self._find(shortopt, longopt)
        if option is None:
            raise OptionError(f"Unknown option '{shortopt or longopt}'")
        name = option.longopt
        if option.type is OptionType.BOOL:
            self.values[name] = True
            return
        if value is None:
            raise OptionError(f"Option '{name}' requires a value")
        if option.type is OptionType.INT:
            self.values[name] = _atoi(value)
        elif option.type is OptionType.DOUBLE:
            self.values[name] = _atof(value)
        elif option.type is OptionType.STRING:
            self.values[name] = value
        elif option.callback is not None:
            option.callback(value)
        else:
            self.values[name].append(value)

    def read(self, path: str) -> None:
        """Read a configuration file; raises OSError if it cannot be opened.

        Lines in no section, in ``[global]`` or in this set's section are
        applied. Unknown options are reported on stderr and skipped.
        """
        section = ""
        with open(path, "rb") as handle:
            for raw in handle:
                line = raw.decode("utf-8", "surrogateescape").strip()
                for stop in ("#", "\n", "\r"):
                    line = line.split(stop, 1)[0]
                if line.startswith("["):
                    end = line.find("]")
                    if end != -1:
                        section = line[1:end]
                    continue
                if section not in ("", "global", self.section):
                    continue
                key, sep, value = line.partition(" ")
                try:
                    if sep:
                        self.handle(None, key.strip(), value.strip())
                    elif key.strip():
                        self.handle(None, key.strip(), None)
                except OptionError as exc:
                    print(exc, file=sys.stderr)

    def _match_long(self, name: str) -> Option:
        for option in self.options:
            if option.longopt == name:
                return option
        matches = [o for o in self.options if o.longopt.startswith(name)]
        if not matches:
            raise OptionError(f"unrecognized option '--{name}'")
        if len(matches) > 1:
            raise OptionError(f"option '--{name}' is ambiguous")
        return matches[0]

    def _match_short(self, letter: str) -> Option:
        for option in self.options:
            if option.shortopt == letter:
                return option
        raise OptionError(f"invalid option -- '{letter}'")

    def _apply(self, option: Option, value: str | None) -> None:
        if option.shortopt:
            self.handle(option.shortopt, None, value)
        else:
            self.handle(None, option.longopt, value)

    def parse_args(self, argv: Sequence[str]) -> list[str]:
        """Apply the options in ``argv`` and return the remaining arguments.

        ``argv`` holds the arguments after the subcommand name. Options and
        plain arguments may be mixed; ``--`` ends option processing.
        """
        positional: list[str] = []
        args = list(argv)
        i = 0
        while i < len(args):
            arg = args[i]
            i += 1
            if arg == "--":
                positional.extend(args[i:])
                break
            if arg.startswith("--"):
                name, eq, value = arg[2:].partition("=")
                option = self._match_long(name)
                if not option.takes_value:
                    if eq:
                        raise OptionError(
                            f"option '--{option.longopt}' doesn't allow an argument")
                    self._apply(option, None)
                    continue
                if not eq:
                    if i >= len(args):
                        raise OptionError(
                            f"option '--{option.longopt}' requires an argument")
                    value = args[i]
                    i += 1
                self._apply(option, value)
            elif arg.startswith("-") and arg != "-":
                pos = 1
                while pos < len(arg):
                    letter = arg[pos]
                    pos += 1
                    option = self._match_short(letter)
                    if not option.takes_value:
                        self._apply(option, None)
                        continue
                    if pos < len(arg):
                        value = arg[pos:]
                    elif i < len(args):
                        value = args[i]
                        i += 1
                    else:
                        raise OptionError(
                            f"option requires an argument -- '{letter}'")
                    self._apply(option, value)
                    break
            else:
                positional.append(arg)
        return positional


def option_values(options: Mapping[str, Any], name: str, default: Any = None) -> Any:
    """Return ``options[name]`` or ``default`` when missing."""
    return options.get(name, default)