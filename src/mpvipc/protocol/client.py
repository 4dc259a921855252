"""Socket client for communicating with mpv."""

from __future__ import annotations

import logging
import socket
from typing import Any, TYPE_CHECKING

from .errors import CommandFailedError, EmptyValueError, WriteZeroError
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
)

if TYPE_CHECKING:
    from ..config import Config

_logger = logging.getLogger("mpvipc.client")

EOL = b"\n"
CHUNK_SIZE = 512


class MpvClient:
    """Client for mpv's JSON IPC over a connected stream socket.

    One request is outstanding at a time: every call writes a request and
    blocks until a reply line decodes. By default the first line that decodes
    as a response is taken as the reply, whatever its ``request_id``; pass
    ``match_request_id=True`` to skip replies carrying another id.

    The client is not thread safe.
    """

    def __init__(
        self,
        sock: socket.socket,
        *,
        chunk_size: int = CHUNK_SIZE,
        match_request_id: bool = False,
    ):
        self._sock = sock
        self.chunk_size = chunk_size
        self.match_request_id = match_request_id

    @classmethod
    def connect(
        cls, address: str, timeout: float | None = None, **kwargs: Any
    ) -> MpvClient:
        """Connect to the mpv socket at ``address``."""
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(timeout)
            sock.connect(address)
        except OSError:
            sock.close()
            raise
        _logger.info(f"Connected to mpv at {address}")
        return cls(sock, **kwargs)

    @classmethod
    def from_config(cls, config: Config) -> MpvClient:
        """Connect using the client section of a Config."""
        from ..config import get_socket_path

        return cls.connect(
            get_socket_path(config),
            timeout=config.client.timeout,
            chunk_size=config.client.chunk_size,
            match_request_id=config.client.match_request_id,
        )

    def set_timeout(self, timeout: float | None) -> None:
        """Bound every later read and write; None blocks forever."""
        self._sock.settimeout(timeout)

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> MpvClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # Commands

    def load_file(self, path: str, mode: LoadMode = LoadMode.REPLACE) -> bool:
        return self._send_command(LoadFile(path, mode))

    def load_list(self, path: str, mode: LoadMode = LoadMode.REPLACE) -> bool:
        return self._send_command(LoadList(path, mode))

    def seek(self, position: int, mode: SeekMode = SeekMode.RELATIVE) -> bool:
        return self._send_command(Seek(position, mode))

    def quit(self, code: int = 0) -> bool:
        return self._send_command(Quit(code))

    def stop(self) -> bool:
        return self._send_command(Stop())

    def clear_playlist(self) -> bool:
        return self._send_command(PlaylistClear())

    def pause(self) -> bool:
        return self._send_command(SetProperty("pause", True))

    def resume(self) -> bool:
        return self._send_command(SetProperty("pause", False))

    def set_property(self, name: str, value: Any) -> bool:
        return self._send_command(SetProperty(name, value))

    # Properties

    def get_is_paused(self) -> bool:
        return self.get_property("pause", bool)

    def get_position(self) -> float:
        return self.get_property("time-pos", float)

    def get_remaining(self) -> float:
        return self.get_property("time-remaining", float)

    def get_duration(self) -> float:
        return self.get_property("duration", float)

    def get_property(self, name: str, data_type: type = object) -> Any:
        """Read a property, raising if mpv fails or sends no value."""
        response = self.write_command(GetProperty(name), data_type)
        if not response.success:
            raise CommandFailedError(response.error)
        if response.data is None:
            raise EmptyValueError(f"value is empty: {name}")
        return response.data

    # Wire

    def _send_command(self, cmd: Command) -> bool:
        response = self.write_command(cmd, bool)
        return response.success

    def write_command(self, cmd: Command, data_type: type = object) -> Response:
        """Send a command and wait for the first reply that decodes."""
        request = Request.from_command(cmd)
        content = request.serialize()
        _logger.info(f"Sending command: {content}")
        self._write(content.encode("utf-8"))
        return self._wait_for_response(request, data_type)

    def _write(self, payload: bytes) -> None:
        view = memoryview(payload)
        while view:
            sent = self._sock.send(view)
            if sent == 0:
                # The newline goes out even when the payload does not
                self._sock.sendall(EOL)
                raise WriteZeroError("Failed to write command")
            view = view[sent:]
        self._sock.sendall(EOL)

    def _recv(self) -> bytes:
        chunk = self._sock.recv(self.chunk_size)
        if not chunk:
            raise ConnectionError("mpv closed the connection")
        return chunk

    def _wait_for_response(self, request: Request, data_type: type) -> Response:
        line = bytearray()
        while True:
            chunk = self._recv()
            start = 0
            while True:
                index = chunk.find(EOL, start)
                if index == -1:
                    # Line continues in the next read
                    line += chunk[start:]
                    break

                line += chunk[start:index]
                response = self._decode_line(bytes(line), request, data_type)
                if response is not None:
                    return response

                line.clear()
                start = index + 1

    def _decode_line(
        self, line: bytes, request: Request, data_type: type
    ) -> Response | None:
        _logger.debug(f"Get response: {line!r}")
        try:
            response = Response.from_line(line.decode("utf-8"), data_type)
        except ValueError:
            return None

        if (
            self.match_request_id
            and response.request_id is not None
            and response.request_id != request.request_id
        ):
            _logger.debug(f"Skipping reply for request {response.request_id}")
            return None

        return response
