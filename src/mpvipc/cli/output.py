"""Output formatting for CLI."""

from __future__ import annotations

import json
import sys
from typing import Any, Callable


def format_time(seconds: float | None) -> str:
    """Format seconds as MM:SS or HH:MM:SS."""
    if seconds is None:
        return "--:--"
    if seconds < 0:
        return "0:00"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_status(data: dict[str, Any]) -> str:
    """Format playback status for display."""
    paused = data.get("paused")
    state_icon = {True: "⏸", False: "▶"}.get(paused, "⏹")

    position = data.get("position")
    duration = data.get("duration")
    lines = [f"{state_icon} {format_time(position)} / {format_time(duration)}"]

    if position is not None and duration:
        progress = min(max(position / duration, 0.0), 1.0)
        bar_width = 40
        filled = int(bar_width * progress)
        bar = "▓" * filled + "░" * (bar_width - filled)
        lines.append(f"  {bar}")

    remaining = data.get("remaining")
    if remaining is not None:
        lines.append(f"  Remaining: {format_time(remaining)}")

    return "\n".join(lines)


def print_error(error: Exception) -> None:
    """Print an error to stderr."""
    code = getattr(error, "code", None)
    if code is not None:
        print(f"Error [{code.value}]: {error}", file=sys.stderr)
    else:
        print(f"Error: {error}", file=sys.stderr)


def print_success(ok: bool, json_output: bool = False) -> None:
    """Print a command acknowledgement, exiting 1 on failure."""
    if json_output:
        print(json.dumps({"success": ok}))
    elif ok:
        print("OK")
    else:
        print("Command failed", file=sys.stderr)

    if not ok:
        sys.exit(1)


def print_value(
    value: Any,
    json_output: bool = False,
    formatter: Callable[[Any], str] | None = None,
) -> None:
    """Print a property value to stdout."""
    if json_output:
        print(json.dumps({"data": value}, indent=2))
    elif formatter:
        print(formatter(value))
    elif isinstance(value, (dict, list)):
        print(json.dumps(value, indent=2))
    else:
        print(value)
