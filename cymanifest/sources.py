"""Input classification, MIME lookup and URL resolution.

Everything here operates on plain identifier strings: a local filesystem path
or an absolute ``https`` URL.
"""

from pathlib import PurePath
from types import MappingProxyType
from urllib.parse import unquote, urlparse

from cymanifest.models import TrackKind


class InsecureResourceError(ValueError):
    """Raised for ``http://`` references; the player rejects them."""
    pass


class NoExtensionError(ValueError):
    """Raised when a filename has no extension."""
    pass


VIDEO_TYPES = MappingProxyType({
    ".mp4": "video/mp4",
    ".webm": "video/webm",
    ".ogv": "video/ogg",
})

AUDIO_TYPES = MappingProxyType({
    ".aac": "audio/aac",
    ".mp3": "audio/mpeg",
    ".mpga": "audio/mpeg",
    ".ogg": "audio/ogg",
    ".oga": "audio/ogg",
})

SUBTITLE_TYPES = MappingProxyType({
    ".vtt": "text/vtt",
})

MIME_TABLES = MappingProxyType({
    TrackKind.VIDEO: VIDEO_TYPES,
    TrackKind.AUDIO: AUDIO_TYPES,
    TrackKind.SUBTITLE: SUBTITLE_TYPES,
})


def is_web_resource(identifier: str) -> bool:
    """True for absolute ``https`` URLs. Raises on plain ``http``."""
    parsed = urlparse(identifier)
    if not parsed.netloc:
        return False
    if parsed.scheme == "http":
        raise InsecureResourceError(
            f"Insecure resource {identifier!r}: only https:// URLs are accepted"
        )
    return parsed.scheme == "https"


def filename(identifier: str) -> str:
    """Final path segment of a local path or of a URL's path."""
    if is_web_resource(identifier):
        return unquote(urlparse(identifier).path.rsplit("/", 1)[-1])
    return PurePath(identifier).name


def _split(identifier: str) -> tuple[str, str]:
    name = filename(identifier)
    idx = name.rfind(".")
    if idx == -1:
        raise NoExtensionError(f"No file extension found for {identifier}")
    return name[:idx], name[idx:]


def extension(identifier: str) -> str:
    """Extension including the leading dot, e.g. ``.mp4``."""
    return _split(identifier)[1]


def stem(identifier: str) -> str:
    """Filename without its extension."""
    return _split(identifier)[0]


def title(identifier: str) -> str:
    """Human-readable title: the stem with underscores turned into spaces."""
    return stem(identifier).replace("_", " ")


def classify(identifier: str) -> TrackKind | None:
    """Return the TrackKind for *identifier*, or None if unsupported.

    Matching is a case-sensitive suffix match on the filename.
    """
    name = filename(identifier)
    for kind, table in MIME_TABLES.items():
        if any(name.endswith(ext) for ext in table):
            return kind
    return None


def content_type(identifier: str, kind: TrackKind | None = None) -> str:
    """MIME type for a classified identifier."""
    kind = kind or classify(identifier)
    if kind is None:
        raise ValueError(f"Unsupported file type: {identifier}")
    return MIME_TABLES[kind][extension(identifier)]


def resolve_url(identifier: str, base_url: str, folder_prefix: str = "") -> str:
    """Public URL for *identifier*.

    Web resources are used as-is; local files are addressed relative to
    *base_url*, optionally inside *folder_prefix* (``"<dirname>/"``).
    """
    if is_web_resource(identifier):
        return identifier
    return base_url.rstrip("/") + "/" + folder_prefix + filename(identifier)
