"""Per-kind track builders."""

from typing import Callable

from cymanifest import sources
from cymanifest.models import (
    AudioTrack,
    ProbeResult,
    SubtitleTrack,
    Track,
    TrackKind,
    VideoTrack,
)
from cymanifest.quality import nearest_quality

Probe = Callable[[str], ProbeResult]


def build_video_track(
    identifier: str,
    base_url: str,
    folder_prefix: str,
    probe: Probe,
) -> VideoTrack:
    """Probe a video input and build its source entry.

    Probe failures propagate; a video that cannot be measured aborts the run.
    """
    # Resolve first so insecure references fail before ffprobe runs.
    url = sources.resolve_url(identifier, base_url, folder_prefix)
    content_type = sources.content_type(identifier, TrackKind.VIDEO)

    props = probe(identifier)
    return VideoTrack(
        url=url,
        content_type=content_type,
        quality=nearest_quality(props.height),
        bitrate=props.bitrate // 1000,
        duration=props.duration,
    )


def build_audio_track(identifier: str, base_url: str, folder_prefix: str) -> AudioTrack:
    return AudioTrack(
        url=sources.resolve_url(identifier, base_url, folder_prefix),
        content_type=sources.content_type(identifier, TrackKind.AUDIO),
        label=sources.title(identifier),
        language="EN",
    )


def build_subtitle_track(
    identifier: str,
    base_url: str,
    folder_prefix: str,
    default: bool = False,
) -> SubtitleTrack:
    return SubtitleTrack(
        url=sources.resolve_url(identifier, base_url, folder_prefix),
        content_type=sources.content_type(identifier, TrackKind.SUBTITLE),
        name=sources.title(identifier),
        default=default,
    )


def build_track(
    kind: TrackKind,
    identifier: str,
    base_url: str,
    folder_prefix: str,
    probe: Probe,
    default: bool = False,
) -> Track:
    """Dispatch to the builder for *kind*. *default* only applies to subtitles."""
    if kind is TrackKind.VIDEO:
        return build_video_track(identifier, base_url, folder_prefix, probe)
    if kind is TrackKind.AUDIO:
        return build_audio_track(identifier, base_url, folder_prefix)
    if kind is TrackKind.SUBTITLE:
        return build_subtitle_track(identifier, base_url, folder_prefix, default=default)
    raise ValueError(f"Unknown track kind: {kind!r}")
