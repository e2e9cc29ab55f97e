"""Text helpers for the console status display."""

from __future__ import annotations

from collections.abc import Mapping

from osdconfig.state import Application


def wrap_footer_text(label: str, text: str, max_line_length: int) -> list[str]:
    """Wrap ``label: text`` on spaces at ``max_line_length``.

    Lines are returned last first, as the footer stacks them bottom up.
    """
    lines: list[str] = []
    current = f"[green]{label}:[white] "
    length = len(label) + 2

    for word in text.split(" "):
        if length + len(word) > max_line_length:
            lines.append(current)
            current = ""
            length = 0
        current += word + " "
        length += len(word) + 1

    if current:
        lines.append(current)
    lines.reverse()
    return lines


def colorize_log_line(line: str) -> str:
    """Wrap warning and error log lines in colour tags."""
    if " WARN:" in line:
        return f"[orange]{line}[white]"
    if " ERROR:" in line:
        return f"[red]{line}[white]"
    return line


def format_applications(applications: Mapping[str, Application]) -> list[str]:
    """Return sorted 'name(version)' entries for the installed applications."""
    return sorted(f"{name}({info.version})" for name, info in applications.items())