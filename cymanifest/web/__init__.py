"""Flask application factory for the cymanifest media server."""

from pathlib import Path

from flask import Flask, jsonify

from cymanifest.config import ProgramConfig


def create_app(media_root: str | Path, config: ProgramConfig | None = None) -> Flask:
    app = Flask(__name__)
    app.config["MEDIA_ROOT"] = Path(media_root).resolve()
    app.config["PROGRAM_CONFIG"] = config or ProgramConfig()

    from cymanifest.web.routes import bp
    app.register_blueprint(bp)

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({"error": "Not found"}), 404

    return app
