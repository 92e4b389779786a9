import pytest

from ducview.options import (
    MAX_OPTIONS,
    Command,
    Option,
    OptionError,
    OptionSet,
    OptionType,
)


def make_set(section="ls"):
    opts = OptionSet(section)
    opts.add_options([
        Option("apparent", "a"),
        Option("bytes", "b"),
        Option("database", "d", OptionType.STRING),
        Option("levels", "l", OptionType.INT, default=4),
        Option("fuzz", None, OptionType.DOUBLE, default=0.7),
        Option("exclude", "e", OptionType.FUNC),
        Option("dirs-only"),
    ])
    return opts


def test_defaults_registered():
    opts = make_set()
    assert opts["levels"] == 4
    assert opts["bytes"] is False
    assert opts["database"] is None
    assert opts["exclude"] == []


def test_long_bool_and_int():
    opts = make_set()
    rest = opts.parse_args(["--bytes", "--levels=7"])
    assert rest == []
    assert opts["bytes"] is True
    assert opts["levels"] == 7


def test_short_attached_and_separate_values():
    opts = make_set()
    opts.parse_args(["-l9"])
    assert opts["levels"] == 9
    opts.parse_args(["-l", "2", "-d", "file.db"])
    assert opts["levels"] == 2
    assert opts["database"] == "file.db"


def test_int_uses_leading_digits():
    opts = make_set()
    opts.parse_args(["--levels", "12abc"])
    assert opts["levels"] == 12
    opts.parse_args(["--levels", "abc"])
    assert opts["levels"] == 0


def test_double_value():
    opts = make_set()
    opts.parse_args(["--fuzz=0.25"])
    assert opts["fuzz"] == 0.25


def test_short_cluster():
    opts = make_set()
    opts.parse_args(["-ab"])
    assert opts["apparent"] is True
    assert opts["bytes"] is True


def test_positionals_are_permuted():
    opts = make_set()
    rest = opts.parse_args(["first", "-b", "second"])
    assert rest == ["first", "second"]
    assert opts["bytes"] is True


def test_double_dash_ends_options():
    opts = make_set()
    rest = opts.parse_args(["--", "-b"])
    assert rest == ["-b"]
    assert opts["bytes"] is False


def test_long_prefix_abbreviation():
    opts = make_set()
    opts.parse_args(["--lev=3"])
    assert opts["levels"] == 3


def test_func_option_collects_values():
    opts = make_set()
    opts.parse_args(["-e", "*.o", "--exclude=*.tmp"])
    assert opts["exclude"] == ["*.o", "*.tmp"]


def test_func_option_callback():
    seen = []
    opts = OptionSet("index")
    opts.add_options([Option("exclude", "e", OptionType.FUNC, callback=seen.append)])
    opts.parse_args(["-e", "x"])
    assert seen == ["x"]
    assert "exclude" not in opts.values


@pytest.mark.parametrize("argv", [
    ["--nothing"],
    ["-z"],
    ["--levels"],
    ["-d"],
    ["--bytes=yes"],
    ["--d"],
])
def test_parse_errors(argv):
    opts = make_set()
    with pytest.raises(OptionError):
        opts.parse_args(argv)


def test_handle_unknown_raises():
    opts = make_set()
    with pytest.raises(OptionError):
        opts.handle(None, "bogus", None)


def test_handle_by_short_name():
    opts = make_set()
    opts.handle("d", None, "x.db")
    assert opts["database"] == "x.db"


def test_read_config_sections(tmp_path):
    path = tmp_path / "ducrc"
    path.write_text(
        "# comment\n"
        "bytes\n"
        "[ls]\n"
        "levels 6\n"
        "[info]\n"
        "levels 9\n"
        "[global]\n"
        "database /tmp/x.db  # trailing\n"
    )
    opts = make_set("ls")
    opts.read(str(path))
    assert opts["bytes"] is True
    assert opts["levels"] == 6
    assert opts["database"] == "/tmp/x.db"


def test_read_config_unknown_option_warns(tmp_path, capsys):
    path = tmp_path / "ducrc"
    path.write_text("bogus\nbytes\n")
    opts = make_set()
    opts.read(str(path))
    assert "Unknown option 'bogus'" in capsys.readouterr().err
    assert opts["bytes"] is True


def test_read_missing_file(tmp_path):
    opts = make_set()
    with pytest.raises(OSError):
        opts.read(str(tmp_path / "missing"))


def test_option_limit():
    opts = OptionSet("x")
    opts.add_options(Option(f"opt{n}") for n in range(MAX_OPTIONS + 6))
    assert len(opts.options) == MAX_OPTIONS
    with pytest.raises(OptionError):
        opts.handle(None, f"opt{MAX_OPTIONS}", None)


def test_command_holds_options():
    option = Option("all", "a")
    command = Command("help", descr_short="Show help", usage="[options]", options=(option,))
    assert command.options[0].longopt == "all"
    assert command.hidden is False