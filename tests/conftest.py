"""Shared test fixtures."""

from pathlib import Path

import pytest

from cymanifest.models import ProbeResult

FIXTURES_DIR = Path(__file__).parent / "fixtures"

BASE_URL = "https://cdn.example.com/media"


class StubProbe:
    """Stands in for ffprobe; records every path it was asked about."""

    def __init__(self, result: ProbeResult | None = None, results: dict | None = None):
        self.result = result or ProbeResult(height=1080, duration=600, bitrate=4_000_000)
        self.results = results or {}
        self.calls: list[str] = []

    def __call__(self, path: str) -> ProbeResult:
        self.calls.append(path)
        for suffix, result in self.results.items():
            if path.endswith(suffix):
                return result
        return self.result


@pytest.fixture
def stub_probe() -> StubProbe:
    return StubProbe()


@pytest.fixture
def make_probe():
    return StubProbe


@pytest.fixture
def sample_config_path() -> Path:
    return FIXTURES_DIR / "sample_config.json"


@pytest.fixture
def sample_manifest_path() -> Path:
    return FIXTURES_DIR / "sample_manifest.json"
