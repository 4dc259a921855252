"""mpv protocol - JSON Lines IPC commands, replies and socket client."""

from .client import MpvClient
from .errors import (
    CommandFailedError,
    EmptyValueError,
    EncodeError,
    ErrorCode,
    MpvError,
    WriteZeroError,
)
from .messages import (
    Command,
    GetProperty,
    LoadFile,
    LoadList,
    LoadMode,
    PlaylistClear,
    Quit,
    Request,
    Response,
    Seek,
    SeekMode,
    SetProperty,
    Stop,
    to_command_list,
)

__all__ = [
    "SeekMode",
    "LoadMode",
    "Command",
    "Seek",
    "LoadFile",
    "LoadList",
    "PlaylistClear",
    "Quit",
    "Stop",
    "SetProperty",
    "GetProperty",
    "to_command_list",
    "Request",
    "Response",
    "ErrorCode",
    "MpvError",
    "EncodeError",
    "WriteZeroError",
    "CommandFailedError",
    "EmptyValueError",
    "MpvClient",
]
