"""Protocol message definitions for mpv JSON IPC."""

from __future__ import annotations

import json
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import EncodeError


SUCCESS = "success"


class SeekMode(str, Enum):
    """Seek modes accepted by the ``seek`` command."""

    RELATIVE = "relative"
    ABSOLUTE = "absolute"
    ABSOLUTE_PERCENT = "absolute-percent"
    RELATIVE_PERCENT = "relative-percent"
    EXACT = "exact"
    KEYFRAMES = "keyframes"


class LoadMode(str, Enum):
    """Load modes for ``loadfile`` and ``loadlist``."""

    REPLACE = "replace"
    APPEND = "append"
    APPEND_PLAY = "append-play"


@dataclass(frozen=True)
class Seek:
    position: int
    mode: SeekMode = SeekMode.RELATIVE


@dataclass(frozen=True)
class LoadFile:
    path: str
    mode: LoadMode = LoadMode.REPLACE


@dataclass(frozen=True)
class LoadList:
    path: str
    mode: LoadMode = LoadMode.REPLACE


@dataclass(frozen=True)
class PlaylistClear:
    pass


@dataclass(frozen=True)
class Quit:
    code: int = 0


@dataclass(frozen=True)
class Stop:
    pass


@dataclass(frozen=True)
class SetProperty:
    name: str
    value: Any


@dataclass(frozen=True)
class GetProperty:
    name: str


Command = Union[
    Seek, LoadFile, LoadList, PlaylistClear, Quit, Stop, SetProperty, GetProperty
]


def _integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"Expected an integer, got {value!r}")
    return value


def to_command_list(cmd: Command) -> list[Any]:
    """Render a command as the positional list mpv expects.

    The first element is always the command name; argument order is fixed
    per command.
    """
    if isinstance(cmd, Seek):
        return ["seek", _integer(cmd.position), SeekMode(cmd.mode).value]
    if isinstance(cmd, LoadFile):
        return ["loadfile", cmd.path, LoadMode(cmd.mode).value]
    if isinstance(cmd, LoadList):
        return ["loadlist", cmd.path, LoadMode(cmd.mode).value]
    if isinstance(cmd, PlaylistClear):
        return ["playlist-clear"]
    if isinstance(cmd, Quit):
        return ["quit", _integer(cmd.code)]
    if isinstance(cmd, Stop):
        return ["stop"]
    if isinstance(cmd, SetProperty):
        return ["set_property", cmd.name, cmd.value]
    if isinstance(cmd, GetProperty):
        return ["get_property", cmd.name]
    raise TypeError(f"Unknown command: {cmd!r}")


def new_request_id() -> int:
    """Random unsigned 32-bit request id."""
    return random.getrandbits(32)


@dataclass
class Request:
    """Protocol request message."""

    command: list[Any]
    request_id: int = field(default_factory=new_request_id)

    @classmethod
    def from_command(cls, cmd: Command) -> Request:
        return cls(command=to_command_list(cmd))

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "request_id": self.request_id,
        }

    def serialize(self) -> str:
        try:
            return json.dumps(self.to_dict(), allow_nan=False)
        except (TypeError, ValueError) as e:
            raise EncodeError(f"Failed to convert to json: {e}") from e


def _check_data(value: Any, data_type: type) -> Any:
    """Check a decoded payload against the type the caller expects."""
    if data_type is object:
        return value
    if data_type is bool:
        if isinstance(value, bool):
            return value
    elif data_type is float:
        # JSON has one number type; integral positions arrive as ints
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            try:
                return float(value)
            except OverflowError as e:
                raise ValueError(f"Number out of float range: {value}") from e
    elif data_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    elif data_type is str:
        if isinstance(value, str):
            return value
    else:
        raise TypeError(f"Unsupported data type: {data_type!r}")
    raise ValueError(f"Expected {data_type.__name__}, got {type(value).__name__}")


@dataclass
class Response:
    """Protocol response message.

    ``data`` and ``error`` are independent on the wire: a response is
    successful when ``error`` is exactly ``"success"``, whether or not it
    carries data.
    """

    error: str
    data: Any | None = None
    request_id: int | None = None

    @property
    def success(self) -> bool:
        return self.error == SUCCESS

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"error": self.error}
        if self.data is not None:
            result["data"] = self.data
        if self.request_id is not None:
            result["request_id"] = self.request_id
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any], data_type: type = object) -> Response:
        error = data.get("error")
        if not isinstance(error, str):
            raise ValueError("Response has no error field")

        value = data.get("data")
        if value is not None:
            value = _check_data(value, data_type)

        request_id = data.get("request_id")
        if not isinstance(request_id, int) or isinstance(request_id, bool):
            request_id = None

        return cls(error=error, data=value, request_id=request_id)

    @classmethod
    def from_line(cls, line: str, data_type: type = object) -> Response:
        """Decode one reply line.

        Raises ValueError if the line is not a response carrying data of
        ``data_type``.
        """
        try:
            data = json.loads(line)
        except RecursionError as e:
            raise ValueError("Response nested too deeply") from e
        if not isinstance(data, dict):
            raise ValueError(f"Not a response: {line}")
        return cls.from_dict(data, data_type)
