"""Routes: static media with CORS, and manifest generation over HTTP."""

import logging
from pathlib import Path

from flask import Blueprint, current_app, jsonify, request, send_from_directory
from werkzeug.security import safe_join

from cymanifest import ffutil, sources
from cymanifest.engine import assemble, expand_inputs
from cymanifest.manifest import manifest_to_dict

logger = logging.getLogger(__name__)

bp = Blueprint("web", __name__)


@bp.route("/media/<path:filename>")
def media(filename: str):
    # Equivalent of the .htaccess header: text tracks are fetched cross-origin.
    resp = send_from_directory(current_app.config["MEDIA_ROOT"], filename)
    resp.headers["Access-Control-Allow-Origin"] = "*"
    return resp


@bp.route("/api/manifest", methods=["POST"])
def build_manifest():
    data = request.get_json(silent=True) or {}
    root = Path(current_app.config["MEDIA_ROOT"])
    cfg = current_app.config["PROGRAM_CONFIG"]

    folder = str(data.get("folder") or "").strip("/")
    directory = safe_join(str(root), folder) if folder else str(root)
    if directory is None:
        return jsonify({"error": f"Invalid folder: {folder}"}), 400
    if not Path(directory).is_dir():
        return jsonify({"error": f"Folder not found: {folder}"}), 404
    folder_prefix = folder + "/" if folder else ""

    files = data.get("files")
    try:
        if files is None:
            identifiers, _ = expand_inputs([directory])
        elif not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            return jsonify({"error": "'files' must be a list of strings"}), 400
        else:
            identifiers = []
            for f in files:
                if sources.is_web_resource(f):
                    identifiers.append(f)
                    continue
                # One folder prefix per manifest; nested entries go through "folder".
                if "/" in f or "\\" in f:
                    return jsonify(
                        {"error": f"Nested path not allowed: {f}; pass its directory as 'folder'"}
                    ), 400
                local = safe_join(directory, f)
                if local is None:
                    return jsonify({"error": f"Invalid file: {f}"}), 400
                identifiers.append(local)

        manifest = assemble(
            identifiers,
            cfg.base_url,
            folder_prefix=folder_prefix,
            probe=ffutil.probe,
        )
    except ffutil.ProbeError as e:
        logger.error("probe failed: %s", e)
        return jsonify({"error": str(e)}), 422
    except ValueError as e:
        return jsonify({"error": str(e)}), 400

    return jsonify(manifest_to_dict(manifest))
