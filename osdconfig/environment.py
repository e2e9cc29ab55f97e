"""Management of system-wide proxy environment variables."""

from __future__ import annotations

import os
from pathlib import Path

from osdconfig.config import NetworkProxy

ENVIRONMENT_FILE = "/etc/environment"

_PROXY_VARIABLES = ("http_proxy", "https_proxy", "no_proxy")


def _write_and_set(path: Path, key: str, value: str) -> None:
    fd = os.open(path, os.O_CREAT | os.O_APPEND | os.O_WRONLY, 0o644)
    with os.fdopen(fd, "a", encoding="utf-8") as handle:
        handle.write(f"{key}={value}\n")
    os.environ[key] = value


def update_environment(
    proxy: NetworkProxy | None, path: str | os.PathLike[str] = ENVIRONMENT_FILE
) -> None:
    """Recreate the environment file and process environment from ``proxy``.

    The existing file is removed and the proxy variables unset; then every
    non-empty proxy setting is written to the file and exported.
    """
    target = Path(path)
    target.unlink(missing_ok=True)

    for name in _PROXY_VARIABLES:
        os.environ.pop(name, None)

    if proxy is None:
        return

    settings = (
        ("http_proxy", proxy.http_proxy),
        ("https_proxy", proxy.https_proxy),
        ("no_proxy", proxy.no_proxy),
    )
    for name, value in settings:
        if value:
            _write_and_set(target, name, value)