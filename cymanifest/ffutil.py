"""ffprobe subprocess helpers."""

import json
import logging
import shutil
import subprocess
from pathlib import Path

from cymanifest.models import ProbeResult

logger = logging.getLogger(__name__)


class ProbeError(RuntimeError):
    """Raised when a video input cannot be probed."""
    pass


class ProbeUnavailable(ProbeError):
    """Raised when ffprobe cannot be invoked."""
    pass


class ProbeEmptyOutput(ProbeError):
    """Raised when ffprobe reports nothing about the video stream."""
    pass


class ProbeParseError(ProbeError):
    """Raised when a field returned by ffprobe is not a number."""
    pass


def check_ffprobe() -> None:
    """Raise ProbeUnavailable if ffprobe is not on PATH."""
    if shutil.which("ffprobe") is None:
        raise ProbeUnavailable("ffprobe not found on PATH")


def _to_int(value, field_name: str, source: str | Path) -> int:
    if value is None or isinstance(value, bool):
        raise ProbeParseError(f"Unable to parse ffprobe {field_name} output for {source}: {value!r}")
    try:
        # ffprobe reports durations as decimal strings ("600.480000")
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise ProbeParseError(
            f"Unable to parse ffprobe {field_name} output for {source}: {value!r}"
        ) from e


def parse_probe_output(stdout: str, source: str | Path = "<input>") -> ProbeResult:
    """Turn ffprobe's JSON output into a ProbeResult.

    Duration and bitrate are read from the first video stream and fall back to
    the container (``format``) values, since WebM and Ogg only report them
    there.
    """
    if not stdout or not stdout.strip():
        raise ProbeEmptyOutput(f"ffprobe output empty for {source}")

    try:
        data = json.loads(stdout)
    except json.JSONDecodeError as e:
        raise ProbeParseError(f"ffprobe returned invalid JSON for {source}") from e

    streams = data.get("streams") or []
    if not streams:
        raise ProbeEmptyOutput(f"No video stream found in {source}")

    stream = streams[0]
    fmt = data.get("format") or {}

    duration = stream.get("duration", fmt.get("duration"))
    bitrate = stream.get("bit_rate", fmt.get("bit_rate"))

    return ProbeResult(
        height=_to_int(stream.get("height"), "height", source),
        duration=_to_int(duration, "duration", source),
        bitrate=_to_int(bitrate, "bitrate", source),
    )


def probe(input_path: str | Path) -> ProbeResult:
    """Extract height, duration and bitrate of the first video stream."""
    cmd = [
        "ffprobe",
        "-v", "error",
        "-select_streams", "v:0",
        "-show_entries", "stream=height,duration,bit_rate:format=duration,bit_rate",
        "-of", "json",
        str(input_path),
    ]
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as e:
        raise ProbeUnavailable(f"Unable to run ffprobe: {e}") from e

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        raise ProbeUnavailable(
            f"ffprobe failed on {input_path} (rc={result.returncode})"
            + (f": {stderr}" if stderr else "")
        )

    return parse_probe_output(result.stdout, source=input_path)
