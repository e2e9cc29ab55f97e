from osdconfig.display import colorize_log_line, format_applications, wrap_footer_text
from osdconfig.state import Application


def test_short_text_fits_on_one_line():
    assert wrap_footer_text("Net", "a b", 80) == ["[green]Net:[white] a b "]


def test_wrapped_lines_are_reversed():
    lines = wrap_footer_text("L", "aaa bbb", 6)
    assert lines == ["bbb ", "[green]L:[white] aaa "]


def test_wrapping_keeps_all_words_in_order():
    words = [f"word{n}" for n in range(20)]
    lines = wrap_footer_text("Installed application(s)", " ".join(words), 30)
    text = "".join(reversed(lines)).replace("[green]Installed application(s):[white] ", "")
    assert text.split() == words
    assert len(lines) > 1


def test_colorize_warning_and_error():
    warn = "2025-01-01 00:00:00 WARN: disk\n"
    error = "2025-01-01 00:00:00 ERROR: fail\n"
    assert colorize_log_line(warn) == "[orange]" + warn + "[white]"
    assert colorize_log_line(error) == "[red]" + error + "[white]"


def test_colorize_leaves_info_unchanged():
    line = "2025-01-01 00:00:00 INFO: ok\n"
    assert colorize_log_line(line) == line


def test_format_applications_sorted():
    apps = {
        "incus": Application(initialized=True, version="1"),
        "debug": Application(version="2"),
    }
    assert format_applications(apps) == ["debug(2)", "incus(1)"]


def test_format_applications_empty():
    assert format_applications({}) == []