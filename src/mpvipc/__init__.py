"""mpvipc - client for mpv's JSON IPC socket."""

from .protocol import (
    CommandFailedError,
    EmptyValueError,
    EncodeError,
    LoadMode,
    MpvClient,
    MpvError,
    SeekMode,
    WriteZeroError,
)

__version__ = "0.1.0"

__all__ = [
    "MpvClient",
    "LoadMode",
    "SeekMode",
    "MpvError",
    "EncodeError",
    "WriteZeroError",
    "CommandFailedError",
    "EmptyValueError",
]
