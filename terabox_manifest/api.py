"""
HTTP surface: a small Flask app exposing the manifest over JSON.

Routes
------
GET /                 – plain-text banner
GET /api?link=…       – manifest of a share link (mode from deployment config)
GET /api/directory    – one directory, realising a lazy-mode continuation

Every failure is answered with ``{"status": "error", "message": …}``.
"""

from typing import Optional

from flask import Flask, Response, current_app, jsonify, request

from .auth import SessionCache, SessionProvider
from .config import DEFAULT_EMAIL, DEFAULT_MODE, DEFAULT_PASSWORD
from .errors import AuthenticationError, InvalidRequestError, TeraboxError
from .logging_setup import log
from .tree import ListMode, TreeController


def build_controller(
    email: Optional[str] = None, password: Optional[str] = None
) -> TreeController:
    """Controller wired from environment credentials with a fresh cache."""
    email = DEFAULT_EMAIL if email is None else email
    password = DEFAULT_PASSWORD if password is None else password
    if not email or not password:
        raise AuthenticationError(
            "Upstream credentials are not configured "
            "(set TERABOX_EMAIL and TERABOX_PASSWORD)"
        )
    return TreeController(SessionProvider(email, password, cache=SessionCache()))


def _controller() -> TreeController:
    # Built on first use so a cold start never logs in or reads secrets early
    controller = current_app.config.get("TERABOX_CONTROLLER")
    if controller is None:
        controller = build_controller()
        current_app.config["TERABOX_CONTROLLER"] = controller
    return controller


def _error(exc: TeraboxError):
    return jsonify(exc.to_dict()), exc.http_status


def create_app(
    controller: Optional[TreeController] = None,
    mode: "str | ListMode | None" = None,
) -> Flask:
    app = Flask(__name__)
    app.config["TERABOX_CONTROLLER"] = controller
    app.config["TERABOX_MODE"] = ListMode.parse(mode or DEFAULT_MODE)

    @app.after_request
    def add_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Headers"] = (
            "Origin, X-Requested-With, Content-Type, Accept"
        )
        return response

    @app.route("/")
    def index():
        return Response(
            "TeraBox manifest server is running. "
            "Use /api?link=YOUR_TERABOX_URL endpoint.",
            mimetype="text/plain",
        )

    @app.route("/api")
    def resolve_link():
        link = request.args.get("link", "").strip()
        if not link:
            return _error(InvalidRequestError("No link provided"))

        try:
            manifest = _controller().resolve(link, current_app.config["TERABOX_MODE"])
        except TeraboxError as exc:
            log.error("Resolving %s failed: %s", link, exc)
            return _error(exc)
        except Exception:
            log.exception("Unexpected error resolving %s", link)
            return jsonify({"status": "error", "message": "An unexpected error occurred"}), 500
        return jsonify(manifest.to_dict())

    @app.route("/api/directory")
    def list_directory():
        path = request.args.get("path", "")
        js_token = request.args.get("jsToken", "")
        shorturl = request.args.get("shorturl", "")
        if not (path and js_token and shorturl):
            return _error(InvalidRequestError(
                "Missing required parameters: path, jsToken, shorturl"
            ))

        try:
            manifest = _controller().list_directory(path, js_token, shorturl)
        except TeraboxError as exc:
            log.error("Listing directory %s failed: %s", path, exc)
            return _error(exc)
        except Exception:
            log.exception("Unexpected error listing directory %s", path)
            return jsonify({"status": "error", "message": "An unexpected error occurred"}), 500
        return jsonify(manifest.to_dict())

    return app
