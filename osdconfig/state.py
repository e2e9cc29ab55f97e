"""Persistent daemon state stored as JSON on disk."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

STATE_FILE_MODE = 0o600


def _mapping(value: Any, what: str) -> dict:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a mapping")
    return value


@dataclass
class Application:
    """An installed application (system extension)."""

    initialized: bool = False
    version: str = ""

    @classmethod
    def _from_dict(cls, data: Any) -> Application:
        data = _mapping(data, "application")
        return cls(
            initialized=bool(data.get("initialized", False)),
            version=str(data.get("version") or ""),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {"initialized": self.initialized, "version": self.version}


@dataclass
class OSRelease:
    """The running and pending OS image releases."""

    running_release: str = ""
    next_release: str = ""

    @classmethod
    def _from_dict(cls, data: Any) -> OSRelease:
        data = _mapping(data, "os")
        return cls(
            running_release=str(data.get("running_release") or ""),
            next_release=str(data.get("next_release") or ""),
        )

    def _to_dict(self) -> dict[str, Any]:
        return {"running_release": self.running_release, "next_release": self.next_release}


@dataclass
class State:
    """The on-disk persistent state.

    Service and system sections are kept as plain mappings and written back unchanged.
    """

    path: Path
    applications: dict[str, Application] = field(default_factory=dict)
    os_release: OSRelease = field(default_factory=OSRelease)
    services: dict[str, Any] = field(default_factory=dict)
    system: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation of the state."""
        return {
            "applications": {
                name: app._to_dict() for name, app in self.applications.items()
            },
            "os": self.os_release._to_dict(),
            "services": dict(self.services),
            "system": dict(self.system),
        }

    @classmethod
    def from_dict(cls, data: Any, path: str | os.PathLike[str]) -> State:
        """Build a state bound to ``path`` from its JSON representation."""
        data = _mapping(data, "state")
        applications = _mapping(data.get("applications"), "applications")
        return cls(
            path=Path(path),
            applications={
                str(name): Application._from_dict(info) for name, info in applications.items()
            },
            os_release=OSRelease._from_dict(data.get("os")),
            services=dict(_mapping(data.get("services"), "services")),
            system=dict(_mapping(data.get("system"), "system")),
        )

    def save(self) -> None:
        """Write the state to its file."""
        body = json.dumps(self.to_dict(), separators=(",", ":"))
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, STATE_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            handle.write(body)


def load_or_create(path: str | os.PathLike[str]) -> State:
    """Load the state file at ``path``, creating an empty one if it does not exist."""
    try:
        body = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        state = State(path=Path(path))
        state.save()
        return state

    return State.from_dict(json.loads(body), path)