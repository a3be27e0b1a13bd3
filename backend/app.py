import os
import logging
import threading
from typing import Optional

from flask import Flask, Response, jsonify, render_template, request
from flask_cors import CORS
from dotenv import load_dotenv

from config import load_config
from domain.constants import DIRECTION_NAMES, KEY_BINDINGS, VALID_DIRECTIONS, CELL_SIZE
from domain.engine import GameEngine
from domain.game_config import GameConfig
from services.board_renderer import BoardRenderer
from services.game_loop import apply_command

load_dotenv()

logger = logging.getLogger(__name__)


class InvalidPayload(Exception):
    """Raised for malformed request payloads; reported as HTTP 400."""


def parse_direction(payload: Optional[dict]):
    """
    Accept either {"direction": "UP"} or {"x": 0, "y": -1}.
    Raises InvalidPayload for anything that is not one of the four unit vectors.
    """
    if not isinstance(payload, dict):
        raise InvalidPayload("Expected a JSON object")

    if "direction" in payload:
        name = str(payload["direction"]).upper()
        if name not in DIRECTION_NAMES:
            raise InvalidPayload(f"Unknown direction '{payload['direction']}'")
        return DIRECTION_NAMES[name]

    x, y = payload.get("x"), payload.get("y")
    # bool is a subclass of int; JSON true/false are not coordinates
    if type(x) is not int or type(y) is not int:
        raise InvalidPayload("Expected 'direction' or integer 'x' and 'y'")
    vector = (x, y)
    if vector not in VALID_DIRECTIONS:
        raise InvalidPayload(f"{vector} is not a unit direction vector")
    return vector


def flask_debug_enabled() -> bool:
    """FLASK_DEBUG=1 or true turns the debugger on; anything else leaves it off."""
    return os.getenv("FLASK_DEBUG", "").strip().lower() in ("1", "true")


def create_app(config: Optional[GameConfig] = None, engine: Optional[GameEngine] = None) -> Flask:
    """
    Build the Flask app serving the browser view and the game API.

    One engine per app; request handlers run on several threads, so every
    engine access goes through `lock`.
    """
    app = Flask(__name__)

    if engine is None:
        engine = GameEngine(config or load_config())
    renderer = BoardRenderer()
    lock = threading.Lock()

    app.config["GAME_ENGINE"] = engine

    # Enable CORS for API routes so a frontend served from another origin can call Flask
    # Allowed origins can be configured via CORS_ALLOWED_ORIGINS env var (comma-separated)
    allowed_origins_env = os.getenv("CORS_ALLOWED_ORIGINS")
    if allowed_origins_env:
        allowed_origins = [o.strip() for o in allowed_origins_env.split(",") if o.strip()]
    else:
        # sensible defaults for local dev
        allowed_origins = [
            "http://localhost:5000",
            "http://127.0.0.1:5000",
        ]

    CORS(app, resources={r"/api/*": {"origins": allowed_origins}})

    def snapshot_response():
        return jsonify(engine.state.to_dict())

    @app.errorhandler(InvalidPayload)
    def handle_bad_request(error):
        return jsonify({"error": str(error)}), 400

    @app.route("/", methods=["GET"])
    def index():
        """Serve the game page. The page owns the tick timer and the key listener."""
        return render_template(
            "index.html",
            grid_size=engine.grid_size,
            cell_size=CELL_SIZE,
            tick_interval_ms=engine.config.tick_interval_ms,
        )

    @app.route("/api/game", methods=["GET"])
    def get_game():
        """Return the current snapshot."""
        with lock:
            return snapshot_response()

    @app.route("/api/game/tick", methods=["POST"])
    def tick():
        with lock:
            engine.tick()
            return snapshot_response()

    @app.route("/api/game/direction", methods=["POST"])
    def set_direction():
        """
        Change direction. A rejected change (reversal, paused, over) is not
        an error; the unchanged snapshot is returned.
        """
        direction = parse_direction(request.get_json(silent=True))
        with lock:
            engine.set_direction(direction)
            return snapshot_response()

    @app.route("/api/game/pause", methods=["POST"])
    def toggle_pause():
        with lock:
            engine.toggle_pause()
            return snapshot_response()

    @app.route("/api/game/reset", methods=["POST"])
    def reset():
        with lock:
            engine.reset()
            return snapshot_response()

    @app.route("/api/game/key", methods=["POST"])
    def press_key():
        """Apply a browser key name (ArrowUp, ' ', ...). Unbound keys are ignored."""
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or "key" not in payload:
            raise InvalidPayload("Expected a JSON object with a 'key' field")
        if not isinstance(payload["key"], str):
            raise InvalidPayload("'key' must be a string")

        command = KEY_BINDINGS.get(payload["key"])
        with lock:
            if command is not None:
                apply_command(engine, command)
            return snapshot_response()

    @app.route("/api/game/frame.png", methods=["GET"])
    def frame():
        """Render the current snapshot as a PNG image."""
        try:
            with lock:
                state = engine.state
            return Response(renderer.render_png(state), mimetype="image/png")
        except Exception as error:
            logger.exception("Error rendering frame: %s", error)
            return jsonify({"error": "Failed to render frame"}), 500

    return app


if __name__ == "__main__":
    logging.basicConfig(level=os.getenv("LOG_LEVEL", "INFO"))
    create_app().run(debug=flask_debug_enabled())
