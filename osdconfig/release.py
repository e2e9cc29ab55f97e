"""Lookup of the running OS release."""

from __future__ import annotations

import os

OS_RELEASE_FILE = "/lib/os-release"


class ReleaseNotFoundError(LookupError):
    """The os-release file holds no IMAGE_VERSION."""

    def __init__(self, message: str = "couldn't determine current OS release") -> None:
        super().__init__(message)


def get_current_release(path: str | os.PathLike[str] = OS_RELEASE_FILE) -> str:
    """Return IMAGE_VERSION from the os-release file, without surrounding quotes."""
    with open(path, encoding="utf-8") as handle:
        for raw in handle:
            line = raw.rstrip("\n").removesuffix("\r")
            key, sep, value = line.partition("=")
            if not sep:
                continue
            if key == "IMAGE_VERSION":
                return value.strip('"')

    raise ReleaseNotFoundError()