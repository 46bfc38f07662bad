"""Persistent settings of the node: the control point it stands for."""

from __future__ import annotations

import enum
import json
import logging
import os
from pathlib import Path
from typing import Optional, Union

NVS_NAMESPACE = "config"
KEY_CONTROL_POINT = "controlpoint"

_log = logging.getLogger(__name__)


class ControlPoint(enum.IntEnum):
    """Control points a node can be assigned to."""

    NONE = -1
    ALPHA = 0
    BRAVO = 1
    CHARLIE = 2
    DELTA = 3
    ECHO = 4


CONTROL_POINT_MAX = ControlPoint.ECHO + 1

_NAMES = {
    ControlPoint.ALPHA: "Alpha",
    ControlPoint.BRAVO: "Bravo",
    ControlPoint.CHARLIE: "Charlie",
    ControlPoint.DELTA: "Delta",
    ControlPoint.ECHO: "Echo",
    ControlPoint.NONE: "None",
}


class StorageError(Exception):
    """A stored setting is missing or holds an invalid value."""


def control_point_to_string(control_point: Union[ControlPoint, int]) -> str:
    """Return the display name of a control point, or "Unknown"."""
    try:
        return _NAMES[ControlPoint(control_point)]
    except ValueError:
        return "Unknown"


class Storage:
    """Key-value settings grouped by namespace, kept in a JSON file.

    With ``path`` set to None the settings live in memory only. A file that
    cannot be read as settings is erased and started afresh.
    """

    def __init__(self, path: Optional[Union[str, os.PathLike]] = None) -> None:
        self._path = Path(path) if path is not None else None
        self._data: dict[str, dict[str, object]] = {}
        if self._path is not None and self._path.exists():
            try:
                loaded = json.loads(self._path.read_text(encoding="utf-8"))
                if not isinstance(loaded, dict) or not all(
                    isinstance(v, dict) for v in loaded.values()
                ):
                    raise ValueError("unexpected layout")
                self._data = loaded
            except (ValueError, OSError, UnicodeDecodeError) as exc:
                _log.warning("Settings file unreadable (%s); erasing", exc)
                self._data = {}
                self._commit()

    def _commit(self) -> None:
        if self._path is None:
            return
        tmp = self._path.with_name(self._path.name + ".tmp")
        tmp.write_text(json.dumps(self._data), encoding="utf-8")
        os.replace(tmp, self._path)

    def set_control_point(self, control_point: Union[ControlPoint, int]) -> None:
        """Save the control point; NONE and unknown values are rejected."""
        try:
            point = ControlPoint(control_point)
        except ValueError:
            raise ValueError(f"invalid control point: {control_point!r}") from None
        if point is ControlPoint.NONE:
            raise ValueError("invalid control point: NONE")
        self._data.setdefault(NVS_NAMESPACE, {})[KEY_CONTROL_POINT] = int(point)
        self._commit()

    def get_control_point(self) -> ControlPoint:
        """Load the saved control point.

        Raises StorageError if none is saved or the saved value is invalid.
        """
        namespace = self._data.get(NVS_NAMESPACE)
        if namespace is None:
            raise StorageError(f"namespace {NVS_NAMESPACE!r} not found")
        if KEY_CONTROL_POINT not in namespace:
            raise StorageError(f"key {KEY_CONTROL_POINT!r} not found")
        value = namespace[KEY_CONTROL_POINT]
        if (
            isinstance(value, bool)
            or not isinstance(value, int)
            or not 0 <= value < CONTROL_POINT_MAX
        ):
            raise StorageError(f"invalid stored control point: {value!r}")
        return ControlPoint(value)