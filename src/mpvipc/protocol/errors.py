"""Error types for the mpv IPC client."""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for client-side protocol failures."""

    # Request errors
    ENCODE_ERROR = "ENCODE_ERROR"
    WRITE_ZERO = "WRITE_ZERO"

    # Response errors
    COMMAND_FAILED = "COMMAND_FAILED"
    EMPTY_VALUE = "EMPTY_VALUE"


class MpvError(Exception):
    """Base class for failures reported by the client."""

    code: ErrorCode

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EncodeError(MpvError):
    """Request could not be converted to JSON."""

    code = ErrorCode.ENCODE_ERROR


class WriteZeroError(MpvError):
    """Socket accepted zero bytes of the request."""

    code = ErrorCode.WRITE_ZERO


class CommandFailedError(MpvError):
    """mpv answered with a non-success status."""

    code = ErrorCode.COMMAND_FAILED

    def __init__(self, error: str):
        super().__init__(f"mpv says command failed: {error}")
        self.error = error


class EmptyValueError(MpvError):
    """mpv reported success but sent no data."""

    code = ErrorCode.EMPTY_VALUE
