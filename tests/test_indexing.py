from ducview.indexing import (
    INDEX_OPTIONS,
    IndexFlags,
    OpenFlags,
    ProgressMeter,
    build_request,
    open_flags,
    summary_message,
)
from ducview.model import Report, Size
from ducview.options import OptionSet


def fmt_size(size, size_type):
    return str(size.get(size_type))


def make_report():
    return Report("/data", Size(7, 10, 3), 2, 1, 0.0)


def test_open_flags_default():
    assert open_flags({}) == OpenFlags.RW | OpenFlags.COMPRESS


def test_open_flags_force_and_uncompressed():
    flags = open_flags({"force": True, "uncompressed": True})
    assert flags == OpenFlags.RW | OpenFlags.FORCE
    assert (flags & OpenFlags.COMPRESS) == OpenFlags(0)


def test_build_request_defaults():
    request = build_request({}, [], [], [])
    assert request.flags == IndexFlags.NONE
    assert request.max_depth is None
    assert request.uid is None
    assert request.username is None


def test_build_request_from_parsed_options():
    opts = OptionSet("index")
    opts.add_options(INDEX_OPTIONS)
    rest = opts.parse_args(
        ["-x", "-H", "--dry-run", "--hide-file-names", "-m", "3", "-U", "42",
         "-u", "alice", "-e", "*.o", "--fs-include=ext4", "--fs-exclude", "nfs", "/srv"])
    request = build_request(opts.values, opts["exclude"], opts["fs-include"], opts["fs-exclude"])
    assert rest == ["/srv"]
    assert request.flags == (IndexFlags.XDEV | IndexFlags.CHECK_HARD_LINKS
                             | IndexFlags.DRY_RUN | IndexFlags.HIDE_FILE_NAMES)
    assert request.max_depth == 3
    assert request.uid == 42
    assert request.username == "alice"
    assert request.excludes == ["*.o"]
    assert request.fs_includes == ["ext4"]
    assert request.fs_excludes == ["nfs"]


def test_progress_render_format():
    meter = ProgressMeter(fmt_size, str)
    line = meter.render(make_report())
    assert line.startswith("\x1b[K[")
    assert line.endswith("] Indexed 10b in 2 files and 1 directories\r")


def test_progress_marker_bounces():
    meter = ProgressMeter(fmt_size, str)
    report = make_report()
    meters = [meter.render(report)[4:12] for _ in range(15)]
    assert all(len(m) == 8 and m.count("#") == 1 for m in meters)
    positions = [m.index("#") for m in meters]
    assert positions[:14] == [0, 1, 2, 3, 4, 5, 6, 7, 6, 5, 4, 3, 2, 1]
    assert meters[14] == meters[0]


def test_summary_message():
    message = summary_message(Report("/d", Size(), 3, 2, 0.0), "1K", "2K", "5 secs")
    assert message == "Indexed 3 files and 2 directories, (1KB apparent, 2KB actual) in 5 secs"