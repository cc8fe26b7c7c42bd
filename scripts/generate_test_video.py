#!/usr/bin/env python3
"""Generate a sample media folder for trying out cymanifest end to end.

Produces, in the target directory:
  Sample_Movie.mp4        10 s, 1280x720 test pattern + 440 Hz tone
  Sample_Movie.webm       same clip at 640x360
  Director_Commentary.mp3 10 s, 660 Hz tone
  English.vtt             two cues
  notes.txt               unsupported file (skipped with a warning)

Then run:  cymanifest generate <directory>
"""

import subprocess
import sys
from pathlib import Path

VTT = """\
WEBVTT

00:00:00.000 --> 00:00:04.000
Sample subtitle one

00:00:05.000 --> 00:00:09.000
Sample subtitle two
"""


def _ffmpeg(*args: str) -> None:
    subprocess.run(["ffmpeg", "-y", "-loglevel", "error", *args], check=True)


def generate_sample_media(output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)

    _ffmpeg(
        "-f", "lavfi", "-i", "testsrc=s=1280x720:d=10:r=30",
        "-f", "lavfi", "-i", "sine=f=440:d=10",
        "-c:v", "libx264", "-c:a", "aac", "-shortest",
        str(output_dir / "Sample_Movie.mp4"),
    )
    _ffmpeg(
        "-f", "lavfi", "-i", "testsrc=s=640x360:d=10:r=30",
        "-f", "lavfi", "-i", "sine=f=440:d=10",
        "-c:v", "libvpx-vp9", "-c:a", "libopus", "-shortest",
        str(output_dir / "Sample_Movie.webm"),
    )
    _ffmpeg(
        "-f", "lavfi", "-i", "sine=f=660:d=10",
        "-c:a", "libmp3lame",
        str(output_dir / "Director_Commentary.mp3"),
    )
    (output_dir / "English.vtt").write_text(VTT, encoding="utf-8")
    (output_dir / "notes.txt").write_text("not a media file\n", encoding="utf-8")
    print(f"Generated sample media in: {output_dir}")


if __name__ == "__main__":
    out = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("sample_media")
    generate_sample_media(out)
