"""mpvipc CLI main entry point."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, Callable

import click

from ..config import Config, get_socket_path, load_config
from ..protocol import (
    CommandFailedError,
    EmptyValueError,
    LoadMode,
    MpvClient,
    MpvError,
    SeekMode,
)
from .output import format_status, print_error, print_success, print_value

LOAD_MODES = [mode.value for mode in LoadMode]
SEEK_MODES = [mode.value for mode in SeekMode]


def setup_logging(level_name: str) -> None:
    """Send mpvipc logs to stderr."""
    level = getattr(logging, level_name.upper(), logging.WARNING)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    logger = logging.getLogger("mpvipc")
    logger.setLevel(level)
    logger.handlers.clear()
    logger.addHandler(handler)


def open_client(obj: dict[str, Any]) -> MpvClient:
    """Connect to mpv with the settings gathered by the group."""
    config: Config = obj["config"]
    return MpvClient.connect(
        obj["socket"],
        timeout=obj["timeout"],
        chunk_size=config.client.chunk_size,
        match_request_id=config.client.match_request_id,
    )


def run(ctx: click.Context, action: Callable[[MpvClient], Any]) -> Any:
    """Run one action against a fresh connection, exiting 1 on errors."""
    try:
        with open_client(ctx.obj) as client:
            return action(client)
    except (MpvError, OSError) as e:
        print_error(e)
        sys.exit(1)


def parse_value(text: str) -> Any:
    """Parse a property value as JSON, falling back to a plain string."""
    try:
        return json.loads(text)
    except ValueError:
        return text


@click.group()
@click.option("--socket", "-s", "socket_path", help="Path to the mpv IPC socket")
@click.option("--timeout", type=float, help="Seconds to wait for a reply")
@click.option("--json", "json_output", is_flag=True, help="Output raw JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log requests and replies")
@click.pass_context
def cli(ctx, socket_path: str | None, timeout: float | None, json_output: bool, verbose: bool):
    """mpvipc - control mpv over its JSON IPC socket.

    Start mpv with --input-ipc-server=/tmp/mpvsocket first.
    """
    config = load_config()
    setup_logging("debug" if verbose else config.logging.level)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["socket"] = socket_path or get_socket_path(config)
    ctx.obj["timeout"] = timeout if timeout is not None else config.client.timeout
    ctx.obj["json"] = json_output


# Playback commands


@cli.command("load")
@click.argument("file")
@click.option("--mode", "-m", type=click.Choice(LOAD_MODES), default="replace")
@click.pass_context
def load(ctx, file: str, mode: str):
    """Load a file or URL."""
    ok = run(ctx, lambda client: client.load_file(file, LoadMode(mode)))
    print_success(ok, ctx.obj["json"])


@cli.command("loadlist")
@click.argument("playlist")
@click.option("--mode", "-m", type=click.Choice(LOAD_MODES), default="replace")
@click.pass_context
def loadlist(ctx, playlist: str, mode: str):
    """Load a playlist file."""
    ok = run(ctx, lambda client: client.load_list(playlist, LoadMode(mode)))
    print_success(ok, ctx.obj["json"])


@cli.command("seek")
@click.argument("position", type=int)
@click.option("--mode", "-m", type=click.Choice(SEEK_MODES), default="relative")
@click.pass_context
def seek(ctx, position: int, mode: str):
    """Seek by or to POSITION (seconds or percent, depending on mode)."""
    ok = run(ctx, lambda client: client.seek(position, SeekMode(mode)))
    print_success(ok, ctx.obj["json"])


@cli.command("pause")
@click.pass_context
def pause(ctx):
    """Pause playback."""
    print_success(run(ctx, lambda client: client.pause()), ctx.obj["json"])


@cli.command("resume")
@click.pass_context
def resume(ctx):
    """Resume playback."""
    print_success(run(ctx, lambda client: client.resume()), ctx.obj["json"])


@cli.command("stop")
@click.pass_context
def stop(ctx):
    """Stop playback."""
    print_success(run(ctx, lambda client: client.stop()), ctx.obj["json"])


@cli.command("clear")
@click.pass_context
def clear(ctx):
    """Clear the playlist."""
    print_success(run(ctx, lambda client: client.clear_playlist()), ctx.obj["json"])


@cli.command("quit")
@click.argument("code", type=int, default=0)
@click.pass_context
def quit_player(ctx, code: int):
    """Quit mpv with exit CODE."""
    print_success(run(ctx, lambda client: client.quit(code)), ctx.obj["json"])


# Property commands


@cli.command("get")
@click.argument("name")
@click.pass_context
def get(ctx, name: str):
    """Print the value of property NAME."""
    value = run(ctx, lambda client: client.get_property(name))
    print_value(value, ctx.obj["json"])


@cli.command("set")
@click.argument("name")
@click.argument("value")
@click.pass_context
def set_(ctx, name: str, value: str):
    """Set property NAME to VALUE (parsed as JSON when possible)."""
    parsed = parse_value(value)
    print_success(run(ctx, lambda client: client.set_property(name, parsed)), ctx.obj["json"])


def read_status(client: MpvClient) -> dict[str, Any]:
    """Read pause state and timing; unavailable properties become None."""
    getters = {
        "paused": client.get_is_paused,
        "position": client.get_position,
        "duration": client.get_duration,
        "remaining": client.get_remaining,
    }
    status: dict[str, Any] = {}
    for key, getter in getters.items():
        try:
            status[key] = getter()
        except (CommandFailedError, EmptyValueError):
            # Nothing loaded
            status[key] = None
    return status


@cli.command("status")
@click.pass_context
def status(ctx):
    """Show pause state and playback position."""
    data = run(ctx, read_status)
    print_value(data, ctx.obj["json"], format_status)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
