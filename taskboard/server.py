#!/usr/bin/env python3
"""
Task Board Server
-----------------
Serves the board web UI and a JSON API over one in-memory TaskBoard.

Usage:
    python -m taskboard.server
    python -m taskboard.server --host 0.0.0.0 --port 3000 --config taskboard.yaml

API:
    GET  /                      → Board UI (HTML)
    GET  /api/board             → JSON: { tasks, columns, stats }
    POST /api/tasks             → JSON body: { title, details }
    POST /api/tasks/<id>/move   → JSON body: { status: "active"|"finished" }
    POST /api/drag              → JSON body: { events: [{ type, target }] }
                                  Replays one drag gesture through the protocol.
    GET  /health

Mutating routes require an X-API-Key header when the configured API secret
environment variable is set.
"""

import argparse
import hmac
import json
import logging
import sys
import threading
from functools import wraps
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request, abort

from .app import TaskBoard
from .config import BoardConfig
from .dnd import DragPhase, DragSession
from .schema import TaskStatus

logger = logging.getLogger(__name__)

UI_FILE = Path(__file__).parent / "board_ui.html"

DRAG_EVENT_TYPES = ("dragstart", "dragover", "dragleave", "drop", "dragend")


def create_app(board: Optional[TaskBoard] = None,
               config: Optional[BoardConfig] = None) -> Flask:
    """Build the Flask app around one board. Every handler holds the board lock."""
    config = config or (board.config if board else BoardConfig.load())
    board = board or TaskBoard(config)
    lock = threading.Lock()

    app = Flask(__name__)
    app.config["BOARD"] = board
    app.config["BOARD_CONFIG"] = config

    # ── Auth ─────────────────────────────────────────────────────────────────

    def require_api_key(f):
        """Decorator: reject requests without a valid X-API-Key header (if a secret is set)."""
        @wraps(f)
        def decorated(*args, **kwargs):
            secret = config.api_secret
            if secret:
                provided = request.headers.get("X-API-Key", "").strip()
                if not hmac.compare_digest(provided, secret):
                    code = 401 if not provided else 403
                    return jsonify({"error": "Unauthorized"}), code
            return f(*args, **kwargs)
        return decorated

    # ── Routes ───────────────────────────────────────────────────────────────

    @app.route("/")
    def index():
        if not UI_FILE.exists():
            abort(404, "board_ui.html not found")
        html = UI_FILE.read_text(encoding="utf-8")
        with lock:
            board_html = str(board.to_html())
        secret = config.api_secret
        html = html.replace("<!-- INJECT_BOARD -->", board_html)
        html = html.replace(
            "/* INJECT_API_KEY */",
            f"const API_KEY = {json.dumps(secret)};" if secret else "const API_KEY = '';"
        )
        return html

    @app.route("/api/board")
    def api_board():
        with lock:
            return jsonify(board.to_dict())

    @app.route("/api/tasks", methods=["POST"])
    @require_api_key
    def api_create_task():
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "JSON object body required"}), 400
        title = data.get("title", "")
        details = data.get("details", "")
        if not isinstance(title, str) or not isinstance(details, str):
            return jsonify({"error": "title and details must be strings"}), 400

        with lock:
            event = board.task_input.submit(title, details)
        if "task" not in event.detail:
            return jsonify({"error": event.detail.get("error", "Invalid input")}), 400
        return jsonify({"task": event.detail["task"].to_dict()}), 201

    @app.route("/api/tasks/<task_id>/move", methods=["POST"])
    @require_api_key
    def api_move_task(task_id):
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "JSON object body required"}), 400
        raw_status = str(data.get("status", "")).strip().lower()
        try:
            new_status = TaskStatus(raw_status)
        except ValueError:
            return jsonify({"error": f"Invalid status: {raw_status}"}), 400

        with lock:
            board.store.move_task(task_id, new_status)
            return jsonify(board.to_dict())

    @app.route("/api/drag", methods=["POST"])
    @require_api_key
    def api_drag():
        data = request.get_json(force=True, silent=True) or {}
        if not isinstance(data, dict):
            return jsonify({"error": "JSON object body required"}), 400
        steps = data.get("events")
        if not isinstance(steps, list) or not steps:
            return jsonify({"error": "events must be a non-empty list"}), 400

        for step in steps:
            if not isinstance(step, dict) or step.get("type") not in DRAG_EVENT_TYPES:
                return jsonify({"error": f"Invalid drag event: {step!r}"}), 400

        with lock:
            session = DragSession()
            terminal = DragPhase.IDLE
            for step in steps:
                event_type = step["type"]
                if event_type == "dragend":
                    terminal = session.end()
                    continue

                element = board.host.get_element_by_id(str(step.get("target", "")))
                if element is None:
                    logger.warning(f"{event_type} on unknown element {step.get('target')!r}")
                    continue

                if event_type == "dragstart":
                    session.start(element)
                elif event_type == "dragover":
                    session.over(element)
                elif event_type == "dragleave":
                    session.leave(element)
                elif event_type == "drop":
                    session.drop(element)

            # A gesture left open by the client ends here
            if session.phase != DragPhase.IDLE:
                terminal = session.end()

            return jsonify({
                "phase": terminal.value,
                "history": [p.value for p in session.history],
                "board": board.to_dict(),
            })

    @app.route("/health")
    def health():
        with lock:
            total = len(board.store.tasks())
        return jsonify({"status": "ok", "tasks": total})

    return app


# ── Main ─────────────────────────────────────────────────────────────────────

def main(argv=None):
    parser = argparse.ArgumentParser(description="Task Board Server")
    parser.add_argument("--host", help="Bind address (use 0.0.0.0 to expose on network)")
    parser.add_argument("--port", type=int)
    parser.add_argument("--config", help="Path to taskboard.yaml (overrides TASKBOARD_CONFIG)")
    args = parser.parse_args(argv)

    config = BoardConfig.load(args.config)
    if args.host:
        config.host = args.host
    if args.port:
        config.port = args.port

    logging.basicConfig(
        level=getattr(logging, str(config.log_level).upper(), logging.INFO),
        format="%(asctime)s [taskboard] %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    app = create_app(config=config)
    logger.info(f"Task board on http://{config.host}:{config.port}")
    app.run(host=config.host, port=config.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
