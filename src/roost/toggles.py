"""Feature toggles — named booleans that gate behavior without a deploy.

The toggle store is an injected, read-mostly dependency. It is loaded
once at startup and may be refreshed or flipped later by an admin
action; page layouts read it on every request.

Free-threading safety:
    - The current state is an immutable ``MappingProxyType`` snapshot
    - Writers build a new snapshot and swap the reference under a lock
    - Readers never lock; they see either the old or the new snapshot
"""

import json
import logging
import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Protocol, runtime_checkable

from roost.errors import ConfigurationError, UnknownToggleError

logger = logging.getLogger("roost.toggles")


class Toggles:
    """Names of the toggles this application consults."""

    COMPONENTS = "components"
    USE_OLD_ELASTIC_PROFILE_SPA = "use_old_elastic_profile_spa"
    SERVER_DRAIN_MODE = "server_drain_mode"


@runtime_checkable
class ToggleSource(Protocol):
    """Anything that can answer "is this toggle on right now?".

    ``is_toggle_on`` must not raise: unknown names and internal failures
    read as off. A source may also implement ``__contains__`` so callers
    can tell "off" apart from "never declared"; ``FeatureToggles`` does.
    """

    def is_toggle_on(self, name: str) -> bool: ...


@dataclass(frozen=True, slots=True)
class FeatureToggle:
    """A declared toggle and its current value."""

    key: str
    value: bool
    description: str = ""


def _read_toggle_file(path: Path) -> dict[str, FeatureToggle]:
    """Parse a toggle document.

    Expected shape::

        {"version": "1", "toggles": [{"key": "components", "value": true}]}
    """
    try:
        document = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        msg = f"Cannot read toggle file {str(path)!r}: {exc}"
        raise ConfigurationError(msg) from exc
    except json.JSONDecodeError as exc:
        msg = f"Toggle file {str(path)!r} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc

    entries = document.get("toggles") if isinstance(document, dict) else None
    if not isinstance(entries, list):
        msg = f"Toggle file {str(path)!r} has no 'toggles' list"
        raise ConfigurationError(msg)

    toggles: dict[str, FeatureToggle] = {}
    for entry in entries:
        if not isinstance(entry, dict) or not isinstance(entry.get("key"), str):
            msg = f"Toggle file {str(path)!r} has an entry without a key: {entry!r}"
            raise ConfigurationError(msg)
        value = entry.get("value", False)
        if not isinstance(value, bool):
            msg = f"Toggle {entry['key']!r} in {str(path)!r} must be true or false"
            raise ConfigurationError(msg)
        key = entry["key"].lower()
        toggles[key] = FeatureToggle(key, value, entry.get("description", ""))
    return toggles


class FeatureToggles:
    """Thread-safe, in-memory toggle store.

    Usage::

        toggles = FeatureToggles({"components": True})
        toggles.is_toggle_on("components")  # True
        toggles.is_toggle_on("nope")        # False, never raises

        toggles = FeatureToggles.from_files("toggles.json", "overrides.json")

    Toggle names are case-insensitive.
    """

    __slots__ = ("_available_file", "_lock", "_overrides_file", "_state")

    def __init__(self, values: Mapping[str, bool] | None = None) -> None:
        self._lock = threading.Lock()
        self._available_file: Path | None = None
        self._overrides_file: Path | None = None
        self._state: Mapping[str, FeatureToggle] = MappingProxyType(
            {
                name.lower(): FeatureToggle(name.lower(), bool(value))
                for name, value in (values or {}).items()
            }
        )

    @classmethod
    def from_files(
        cls,
        available: str | Path,
        overrides: str | Path | None = None,
    ) -> FeatureToggles:
        """Load declared toggles, then apply user overrides.

        Override entries for toggles that are not declared in *available*
        are ignored (and logged), so a stale overrides file cannot invent
        new toggles.
        """
        toggles = cls()
        toggles._available_file = Path(available)
        toggles._overrides_file = Path(overrides) if overrides is not None else None
        toggles.refresh()
        return toggles

    def refresh(self) -> None:
        """Re-read the backing files and swap in the new state.

        A no-op for stores built from a plain mapping.
        """
        if self._available_file is None:
            return

        state = _read_toggle_file(self._available_file)
        if self._overrides_file is not None and self._overrides_file.exists():
            for key, override in _read_toggle_file(self._overrides_file).items():
                if key not in state:
                    logger.warning("Ignoring override for undeclared toggle %r", key)
                    continue
                state[key] = replace(state[key], value=override.value)

        with self._lock:
            self._state = MappingProxyType(state)
        logger.debug("Loaded %d toggles from %s", len(state), self._available_file)

    def is_toggle_on(self, name: str) -> bool:
        toggle = self._state.get(name.lower())
        return toggle is not None and toggle.value

    def change_value(self, name: str, value: bool) -> None:
        """Flip a declared toggle. Takes effect on the next read."""
        key = name.lower()
        with self._lock:
            current = self._state.get(key)
            if current is None:
                raise UnknownToggleError(name)
            state = dict(self._state)
            state[key] = replace(current, value=value)
            self._state = MappingProxyType(state)
        logger.info("Toggle %r set to %s", key, value)

    def all(self) -> list[FeatureToggle]:
        """All declared toggles, sorted by key."""
        return sorted(self._state.values(), key=lambda t: t.key)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._state

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._state))

    def __len__(self) -> int:
        return len(self._state)
