"""Shared data types used across cymanifest."""

from dataclasses import dataclass, field
from enum import Enum


class TrackKind(Enum):
    """What a classified input file contributes to a manifest."""

    VIDEO = "video"
    AUDIO = "audio"
    SUBTITLE = "subtitle"


@dataclass(frozen=True)
class ProbeResult:
    """Video stream properties extracted via ffprobe."""

    height: int
    duration: int
    bitrate: int  # bits per second


@dataclass(frozen=True)
class VideoTrack:
    """A primary video source."""

    url: str
    content_type: str
    quality: int
    bitrate: int  # kbps
    # Seeds the manifest duration; never serialized.
    duration: int = field(default=0, compare=False)


@dataclass(frozen=True)
class AudioTrack:
    """An alternate audio track."""

    url: str
    content_type: str
    label: str
    language: str = "EN"


@dataclass(frozen=True)
class SubtitleTrack:
    """A text track (WebVTT)."""

    url: str
    content_type: str
    name: str
    default: bool = False


Track = VideoTrack | AudioTrack | SubtitleTrack


@dataclass(frozen=True)
class Manifest:
    """A complete custom-media manifest."""

    title: str
    duration: int
    sources: tuple[VideoTrack, ...]
    audio_tracks: tuple[AudioTrack, ...] = ()
    text_tracks: tuple[SubtitleTrack, ...] = ()
    live: bool = False
