"""Orchestrator — classifies inputs and assembles them into a Manifest."""

import logging
from pathlib import Path
from typing import Callable, Sequence

from cymanifest import ffutil, sources
from cymanifest.models import (
    AudioTrack,
    Manifest,
    SubtitleTrack,
    TrackKind,
    VideoTrack,
)
from cymanifest.tracks import Probe, build_track

logger = logging.getLogger(__name__)


class NoPrimarySourceError(ValueError):
    """Raised when none of the inputs is a video source."""
    pass


def expand_inputs(args: Sequence[str | Path]) -> tuple[list[str], str]:
    """Expand a lone directory argument into its files.

    Returns the identifiers to process and the folder prefix used for URL
    construction (``"<dirname>/"`` for a directory, otherwise empty).
    """
    if len(args) == 1 and Path(args[0]).is_dir():
        directory = Path(args[0]).resolve()
        files = sorted(str(p) for p in directory.iterdir() if p.is_file())
        logger.debug("expanded %s into %d file(s)", directory, len(files))
        return files, directory.name + "/"
    return [str(a) for a in args], ""


def assemble(
    identifiers: Sequence[str],
    base_url: str,
    folder_prefix: str = "",
    probe: Probe = ffutil.probe,
    on_progress: Callable[[str, float], None] | None = None,
) -> Manifest:
    """Build a Manifest from an ordered list of identifiers.

    Args:
        identifiers: Local paths or https URLs, in the order they should appear.
        base_url: Public URL the local files are served from.
        folder_prefix: Path segment inserted between base_url and filenames.
        probe: Callable returning the video properties of an identifier.
        on_progress: Optional callback(stage_name, fraction_complete).
    """

    def _progress(stage: str, frac: float) -> None:
        if on_progress:
            on_progress(stage, frac)

    video_tracks: list[VideoTrack] = []
    audio_tracks: list[AudioTrack] = []
    text_tracks: list[SubtitleTrack] = []
    title = ""
    duration = 0

    total = len(identifiers) or 1
    for i, identifier in enumerate(identifiers):
        kind = sources.classify(identifier)
        if kind is None:
            logger.warning("File was not valid, skipping: %s", identifier)
            continue

        _progress(f"Adding {kind.value} {sources.filename(identifier)}", i / total)
        track = build_track(
            kind,
            identifier,
            base_url,
            folder_prefix,
            probe,
            default=not text_tracks,
        )

        if kind is TrackKind.VIDEO:
            if not video_tracks:
                title = sources.title(identifier)
                duration = track.duration
            video_tracks.append(track)
        elif kind is TrackKind.AUDIO:
            audio_tracks.append(track)
        else:
            text_tracks.append(track)

    if not video_tracks:
        raise NoPrimarySourceError("Unable to create manifest: No primary source found.")

    _progress("Done", 1.0)
    return Manifest(
        title=title,
        duration=duration,
        sources=tuple(video_tracks),
        audio_tracks=tuple(audio_tracks),
        text_tracks=tuple(text_tracks),
        live=False,
    )
