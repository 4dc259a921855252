"""Pytest configuration and fixtures for mpvipc tests."""

from __future__ import annotations

import json
import socket
import threading
from typing import Any, Callable, Generator

import pytest

from mpvipc.protocol import MpvClient


class FakeStream:
    """Scripted stand-in for a connected socket.

    Each item of ``chunks`` is returned by one ``recv`` call (split further
    if longer than the requested size); an exception item is raised instead.
    An exhausted script reads as end of stream.
    """

    def __init__(
        self,
        chunks: list[bytes | Exception] | None = None,
        write_zero: bool = False,
        max_send: int | None = None,
    ):
        self.chunks = list(chunks or [])
        self.write_zero = write_zero
        self.max_send = max_send
        self.sent = bytearray()
        self.recv_calls = 0
        self.recv_sizes: list[int] = []
        self.timeout: float | None = None
        self.closed = False

    def recv(self, bufsize: int) -> bytes:
        self.recv_calls += 1
        self.recv_sizes.append(bufsize)
        if not self.chunks:
            return b""
        chunk = self.chunks.pop(0)
        if isinstance(chunk, Exception):
            raise chunk
        if len(chunk) > bufsize:
            self.chunks.insert(0, chunk[bufsize:])
            chunk = chunk[:bufsize]
        return chunk

    def send(self, data: bytes) -> int:
        if self.write_zero:
            return 0
        data = bytes(data)
        if self.max_send is not None:
            data = data[: self.max_send]
        self.sent += data
        return len(data)

    def sendall(self, data: bytes) -> None:
        self.sent += bytes(data)

    def settimeout(self, timeout: float | None) -> None:
        self.timeout = timeout

    def close(self) -> None:
        self.closed = True

    def sent_request(self) -> dict[str, Any]:
        """Decode the single request line written so far."""
        assert self.sent.endswith(b"\n")
        assert self.sent.count(b"\n") == 1
        return json.loads(self.sent[:-1])


class FakeMpvServer:
    """Answers request lines on one end of a socket pair with scripted replies."""

    def __init__(self, sock: socket.socket, replies: list[Any]):
        self.sock = sock
        self.replies = list(replies)
        self.requests: list[dict[str, Any]] = []
        self._thread = threading.Thread(target=self._serve, daemon=True)

    def start(self) -> None:
        self._thread.start()

    def join(self, timeout: float = 5.0) -> None:
        self._thread.join(timeout)

    def _serve(self) -> None:
        with self.sock.makefile("rb") as f:
            for raw in f:
                request = json.loads(raw)
                self.requests.append(request)
                if not self.replies:
                    return
                reply = self.replies.pop(0)
                if callable(reply):
                    reply = reply(request)
                self.sock.sendall(reply)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch) -> Generator[None, None, None]:
    """Keep user config and socket overrides out of tests."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.delenv("MPVIPC_SOCKET", raising=False)
    yield


@pytest.fixture
def fake_stream() -> Callable[..., FakeStream]:
    """Factory for scripted streams."""
    return FakeStream


@pytest.fixture
def mpv_server() -> Generator[Callable[..., tuple[MpvClient, FakeMpvServer]], None, None]:
    """Factory connecting an MpvClient to a fake mpv over a socket pair."""
    pairs: list[tuple[socket.socket, socket.socket]] = []

    def start(*replies: Any, **client_kwargs: Any) -> tuple[MpvClient, FakeMpvServer]:
        client_sock, server_sock = socket.socketpair()
        # Keep a broken test from hanging the suite
        client_sock.settimeout(5.0)
        pairs.append((client_sock, server_sock))
        server = FakeMpvServer(server_sock, list(replies))
        server.start()
        return MpvClient(client_sock, **client_kwargs), server

    yield start

    for client_sock, server_sock in pairs:
        client_sock.close()
        server_sock.close()
