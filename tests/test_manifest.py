"""Tests for manifest serialization and output files."""

import json
from pathlib import Path

import pytest

from cymanifest.engine import assemble
from cymanifest.manifest import (
    HTACCESS_LINE,
    dumps_manifest,
    load_manifest,
    manifest_filename,
    manifest_from_dict,
    manifest_to_dict,
    output_directory,
    write_htaccess,
    write_manifest,
)
from cymanifest.models import AudioTrack, Manifest, SubtitleTrack, VideoTrack

BASE_URL = "https://cdn.example.com/media"


def _make_manifest() -> Manifest:
    return Manifest(
        title="Big Buck Bunny",
        duration=596,
        sources=(
            VideoTrack(
                url=f"{BASE_URL}/Big_Buck_Bunny.mp4",
                content_type="video/mp4",
                quality=1080,
                bitrate=4000,
                duration=596,
            ),
        ),
        audio_tracks=(
            AudioTrack(
                url=f"{BASE_URL}/Commentary_Track.mp3",
                content_type="audio/mpeg",
                label="Commentary Track",
            ),
        ),
        text_tracks=(
            SubtitleTrack(
                url=f"{BASE_URL}/English.vtt",
                content_type="text/vtt",
                name="English",
                default=True,
            ),
        ),
    )


class TestManifestToDict:
    def test_field_names(self):
        d = manifest_to_dict(_make_manifest())
        assert set(d) == {"title", "duration", "live", "sources", "audioTracks", "textTracks"}
        assert set(d["sources"][0]) == {"url", "contentType", "quality", "bitrate"}
        assert set(d["audioTracks"][0]) == {"url", "contentType", "label", "language"}
        assert set(d["textTracks"][0]) == {"url", "contentType", "name", "default"}

    def test_values(self):
        d = manifest_to_dict(_make_manifest())
        assert d["live"] is False
        assert d["sources"][0]["quality"] == 1080
        assert d["audioTracks"][0]["language"] == "EN"
        assert d["textTracks"][0]["default"] is True

    def test_non_default_subtitle_keeps_key(self, stub_probe):
        m = assemble(["movie.mp4", "en.vtt", "fr.vtt"], BASE_URL, probe=stub_probe)
        d = manifest_to_dict(m)
        assert d["textTracks"][1]["default"] is False

    def test_video_duration_not_serialized(self):
        d = manifest_to_dict(_make_manifest())
        assert "duration" not in d["sources"][0]

    def test_matches_sample_fixture(self, sample_manifest_path: Path):
        expected = json.loads(sample_manifest_path.read_text())
        assert manifest_to_dict(_make_manifest()) == expected


class TestRoundTrip:
    def test_dumps_and_parse(self):
        m = _make_manifest()
        assert manifest_from_dict(json.loads(dumps_manifest(m))) == m

    def test_assembled_round_trip(self, stub_probe):
        m = assemble(["movie.mp4", "dub.ogg", "en.vtt", "fr.vtt"], BASE_URL, probe=stub_probe)
        assert manifest_from_dict(json.loads(dumps_manifest(m))) == m

    def test_dumps_is_indented(self):
        assert "\n  \"title\"" in dumps_manifest(_make_manifest())


class TestLoadManifest:
    def test_load_sample(self, sample_manifest_path: Path):
        m = load_manifest(sample_manifest_path)
        assert m.title == "Big Buck Bunny"
        assert m.duration == 596
        assert m.text_tracks[0].default is True

    def test_load_invalid_json(self, tmp_path: Path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(json.JSONDecodeError):
            load_manifest(bad)

    def test_load_missing_fields(self, tmp_path: Path):
        incomplete = tmp_path / "incomplete.json"
        incomplete.write_text('{"title": "x"}')
        with pytest.raises(ValueError, match="must contain"):
            load_manifest(incomplete)

    def test_load_missing_track_field(self, tmp_path: Path):
        broken = tmp_path / "broken.json"
        broken.write_text('{"title": "x", "duration": 1, "sources": [{"url": "https://a/b.mp4"}]}')
        with pytest.raises(ValueError, match="missing field"):
            load_manifest(broken)


class TestOutputFiles:
    def test_filename_uses_stem(self):
        assert manifest_filename("/srv/Big_Buck_Bunny.mp4") == "Big_Buck_Bunny.json"

    def test_remote_filename_decoded(self):
        assert manifest_filename("https://cdn.example.com/v/My%20Movie.mp4") == "My Movie.json"

    def test_written_next_to_local_source(self, tmp_path: Path):
        source = tmp_path / "movie.mp4"
        path = write_manifest(_make_manifest(), str(source))
        assert path == tmp_path.resolve() / "movie.json"
        assert json.loads(path.read_text())["title"] == "Big Buck Bunny"

    def test_remote_source_uses_output_dir(self, tmp_path: Path):
        out = tmp_path / "manifests"
        path = write_manifest(_make_manifest(), "https://cdn.example.com/v/movie.mp4", out)
        assert path == out / "movie.json"
        assert path.exists()

    def test_remote_source_defaults_to_cwd(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert output_directory("https://cdn.example.com/v/movie.mp4").resolve() == tmp_path.resolve()

    def test_htaccess(self, tmp_path: Path):
        path = write_htaccess(tmp_path)
        assert path.name == ".htaccess"
        assert path.read_text() == 'Header set Access-Control-Allow-Origin "*"'
        assert HTACCESS_LINE in path.read_text()
