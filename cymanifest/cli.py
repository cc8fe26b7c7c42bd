"""Thin CLI entry point — loads config, assembles a Manifest and writes it."""

import argparse
import logging
import sys
from pathlib import Path

from cymanifest import ffutil, sources
from cymanifest.config import config_path, create_config_if_missing, load_config
from cymanifest.engine import assemble, expand_inputs
from cymanifest.manifest import write_htaccess, write_manifest
from cymanifest.models import TrackKind


def _add_config_option(parser: argparse.ArgumentParser) -> None:
    # SUPPRESS keeps the top-level --config value when omitted here.
    parser.add_argument("--config", "-c", type=Path, default=argparse.SUPPRESS, help="Path to config.json")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cymanifest",
        description="cymanifest — build custom media manifests from video, audio and subtitle files.",
    )
    parser.add_argument("--config", "-c", type=Path, help="Path to config.json")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser("generate", help="Generate a manifest")
    _add_config_option(gen)
    gen.add_argument(
        "files",
        nargs="+",
        help="Media files / https URLs, or a single directory",
    )
    gen.add_argument(
        "--output-dir", "-o",
        type=Path,
        help="Where to write the manifest when the first video is a URL",
    )

    serve = sub.add_parser("serve", help="Serve a media directory and the manifest API")
    _add_config_option(serve)
    serve.add_argument("media_root", type=Path, help="Directory to serve")
    serve.add_argument("--port", type=int, default=8321, help="Port to listen on")
    serve.add_argument("--host", type=str, default="127.0.0.1", help="Host to bind to")
    return parser


def _generate(args: argparse.Namespace) -> None:
    cfg_path = config_path(args.config)
    if create_config_if_missing(cfg_path):
        print(f"Created default config at {cfg_path}; edit baseUrl before publishing.")
    cfg = load_config(cfg_path)

    identifiers, folder_prefix = expand_inputs(args.files)
    ffutil.check_ffprobe()

    def on_progress(stage: str, frac: float) -> None:
        print(f"  [{frac:4.0%}] {stage}")

    manifest = assemble(
        identifiers,
        cfg.base_url,
        folder_prefix=folder_prefix,
        probe=ffutil.probe,
        on_progress=on_progress,
    )

    first_source = next(i for i in identifiers if sources.classify(i) is TrackKind.VIDEO)
    out_path = write_manifest(manifest, first_source, args.output_dir or cfg.output_dir)

    print()
    print(f"Done! Manifest: {out_path}")
    print(f"  Title: {manifest.title}")
    print(f"  Duration: {manifest.duration}s")
    print(
        f"  Sources: {len(manifest.sources)}, audio tracks: {len(manifest.audio_tracks)}, "
        f"text tracks: {len(manifest.text_tracks)}"
    )

    if cfg.create_htaccess and manifest.text_tracks:
        write_htaccess(out_path.parent)
        print(f"  Wrote .htaccess to {out_path.parent}")


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "serve":
            from cymanifest.web import create_app
            cfg_path = config_path(args.config)
            create_config_if_missing(cfg_path)
            app = create_app(args.media_root, load_config(cfg_path))
            print(f"cymanifest media server: http://{args.host}:{args.port}")
            app.run(host=args.host, port=args.port, debug=False)
            return

        _generate(args)
    except (ValueError, ffutil.ProbeError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
