"""JSON manifest document: the contract with the custom media player."""

import json
import logging
from pathlib import Path

from cymanifest import sources
from cymanifest.models import AudioTrack, Manifest, SubtitleTrack, VideoTrack

logger = logging.getLogger(__name__)

HTACCESS_LINE = 'Header set Access-Control-Allow-Origin "*"'


def manifest_to_dict(manifest: Manifest) -> dict:
    """Serialize using the player's field names."""
    return {
        "title": manifest.title,
        "duration": manifest.duration,
        "live": manifest.live,
        "sources": [
            {
                "url": s.url,
                "contentType": s.content_type,
                "quality": s.quality,
                "bitrate": s.bitrate,
            }
            for s in manifest.sources
        ],
        "audioTracks": [
            {
                "url": a.url,
                "contentType": a.content_type,
                "label": a.label,
                "language": a.language,
            }
            for a in manifest.audio_tracks
        ],
        "textTracks": [
            {
                "url": t.url,
                "contentType": t.content_type,
                "name": t.name,
                "default": t.default,
            }
            for t in manifest.text_tracks
        ],
    }


def dumps_manifest(manifest: Manifest) -> str:
    return json.dumps(manifest_to_dict(manifest), indent=2)


def manifest_from_dict(data: dict) -> Manifest:
    """Rebuild a Manifest from its JSON form.

    The per-source duration is not part of the document, so video tracks come
    back with duration 0.
    """
    missing = [k for k in ("title", "duration", "sources") if k not in data]
    if missing:
        raise ValueError(f"Manifest must contain {', '.join(missing)} field(s)")

    try:
        video = tuple(
            VideoTrack(
                url=s["url"],
                content_type=s["contentType"],
                quality=int(s["quality"]),
                bitrate=int(s["bitrate"]),
            )
            for s in data["sources"]
        )
        audio = tuple(
            AudioTrack(
                url=a["url"],
                content_type=a["contentType"],
                label=a["label"],
                language=a.get("language", "EN"),
            )
            for a in data.get("audioTracks", [])
        )
        text = tuple(
            SubtitleTrack(
                url=t["url"],
                content_type=t["contentType"],
                name=t["name"],
                default=bool(t.get("default", False)),
            )
            for t in data.get("textTracks", [])
        )
    except KeyError as e:
        raise ValueError(f"Manifest track is missing field {e}") from e

    return Manifest(
        title=data["title"],
        duration=int(data["duration"]),
        live=bool(data.get("live", False)),
        sources=video,
        audio_tracks=audio,
        text_tracks=text,
    )


def load_manifest(path: str | Path) -> Manifest:
    """Load a manifest from a JSON file."""
    path = Path(path)
    return manifest_from_dict(json.loads(path.read_text(encoding="utf-8")))


def manifest_filename(first_source: str) -> str:
    """``<stem>.json`` named after the first video source."""
    return sources.stem(first_source) + ".json"


def output_directory(first_source: str, output_dir: str | Path | None = None) -> Path:
    """Where the manifest goes.

    Next to a local first source; into *output_dir* (default: the working
    directory) when the first source is a web resource.
    """
    if sources.is_web_resource(first_source):
        return Path(output_dir) if output_dir else Path.cwd()
    return Path(first_source).resolve().parent


def write_manifest(
    manifest: Manifest,
    first_source: str,
    output_dir: str | Path | None = None,
) -> Path:
    """Write the manifest JSON and return its path."""
    directory = output_directory(first_source, output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / manifest_filename(first_source)
    path.write_text(dumps_manifest(manifest), encoding="utf-8")
    logger.info("wrote manifest to %s", path)
    return path


def write_htaccess(directory: str | Path) -> Path:
    """Write an .htaccess allowing cross-origin fetches of text tracks."""
    path = Path(directory) / ".htaccess"
    path.write_text(HTACCESS_LINE, encoding="utf-8")
    logger.info("wrote htaccess to %s", path.parent)
    return path
