from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from string import Template
from typing import Any, Dict, Optional, Tuple, Type

from flask import Flask, jsonify, request

from .config import SETTINGS, BoardSettings, configure_logging
from .errors import (
    CaptureError,
    DecodeError,
    ImageNotFoundError,
    LedBoardError,
)
from .infrastructure.capture import CaptureClient
from .infrastructure.responses import send_image
from .infrastructure.storage import ImageStore, gallery
from .payloads import effect_options_from, text_spec_from
from .processing.codec import decode, format_for_filename
from .processing.pipeline import render_led_effect, render_text_image

APP_VERSION = "1.0.0"

log = logging.getLogger(__name__)

_ERROR_STATUS: Tuple[Tuple[Type[LedBoardError], int], ...] = (
    (ImageNotFoundError, 404),
    (DecodeError, 422),
    (CaptureError, 502),
)


def _status_for(exc: LedBoardError) -> int:
    for error_type, status in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status
    return 400


def _json_body() -> Dict[str, Any]:
    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def _missing(payload: Dict[str, Any], *names: str) -> bool:
    return any(not payload.get(name) for name in names)


def create_app(
    settings: Optional[BoardSettings] = None,
    capture_client: Optional[CaptureClient] = None,
) -> Flask:
    settings = settings or SETTINGS
    configure_logging(settings)
    app = Flask(__name__)

    screenshots = ImageStore(settings.screenshots_dir, "screenshot", "/screenshots")
    processed = ImageStore(settings.processed_dir, "processed", "/processed")
    capture = capture_client or CaptureClient(settings)

    @app.errorhandler(LedBoardError)
    def handle_board_error(exc: LedBoardError):
        status = _status_for(exc)
        log.warning("%s %s failed: %s", request.method, request.path, exc)
        return jsonify(error=exc.message, **exc.to_dict()), status

    @app.route("/api/screenshot", methods=["POST"])
    def screenshot():
        payload = _json_body()
        if _missing(payload, "url", "filename"):
            return jsonify(error="URL and filename are required"), 400

        filename = payload["filename"]
        screenshots.path_for(filename)
        data = capture.capture(payload["url"], selector=payload.get("selector") or None)
        decode(data)
        path = screenshots.save(filename, data)
        return jsonify(success=True, path=str(path), url=screenshots.url_for(filename))

    @app.route("/api/process", methods=["POST"])
    def process():
        payload = _json_body()
        if _missing(payload, "inputFile", "outputFilename"):
            return jsonify(error="Input file and output filename are required"), 400

        output_name = payload["outputFilename"]
        processed.path_for(output_name)
        options = effect_options_from(payload, settings.led_size)
        source = screenshots.read(payload["inputFile"])
        data = render_led_effect(source, format_for_filename(output_name), options)
        path = processed.save(output_name, data)
        return jsonify(success=True, path=str(path), url=processed.url_for(output_name))

    @app.route("/api/text", methods=["POST"])
    def text():
        payload = _json_body()
        if _missing(payload, "outputFilename"):
            return jsonify(error="Text and output filename are required"), 400

        output_name = payload["outputFilename"]
        processed.path_for(output_name)
        spec = text_spec_from(payload, settings.font_size)
        data = render_text_image(spec, format_for_filename(output_name), font_path=settings.font_path)
        path = processed.save(output_name, data)
        return jsonify(success=True, path=str(path), url=processed.url_for(output_name))

    @app.route("/api/render/led", methods=["POST"])
    def render_led():
        fmt = request.args.get("format") or settings.output_format
        options = effect_options_from(request.args, settings.led_size)
        data = render_led_effect(request.get_data(), fmt, options)
        return send_image(data, fmt)

    @app.route("/api/images")
    def images():
        return jsonify(gallery(screenshots, processed))

    @app.route("/screenshots/<name>")
    def screenshot_file(name: str):
        return send_image(screenshots.read(name), format_for_filename(name))

    @app.route("/processed/<name>")
    def processed_file(name: str):
        return send_image(processed.read(name), format_for_filename(name))

    @app.route("/health")
    def health():
        return jsonify(
            ok=True,
            led_size=settings.led_size,
            output_format=settings.output_format,
        )

    @app.route("/")
    def index():
        endpoints = [
            ("POST", "/api/screenshot", "Capture a page (url, filename, selector)"),
            ("POST", "/api/process", "LED effect from a screenshot into processed"),
            ("POST", "/api/text", "Render a line of text into processed"),
            ("POST", "/api/render/led", "LED effect on a raw image body"),
            ("GET", "/api/images", "Gallery listing"),
            ("GET", "/health", "Service status"),
        ]
        endpoint_rows = "".join(
            f"<tr><td>{method}</td><td><code>{escape(path)}</code></td><td>{escape(desc)}</td></tr>"
            for method, path, desc in endpoints
        )

        def render_cards(entries) -> str:
            if not entries:
                return '<p class="empty">No images yet.</p>'
            return "".join(
                f'<a class="card" href="{escape(entry["url"])}" target="_blank">'
                f'<img src="{escape(entry["url"])}" alt="{escape(entry["name"])}">'
                f'<span>{escape(entry["name"])}</span></a>'
                for entry in entries
            )

        listing = gallery(screenshots, processed)
        template_path = Path(__file__).parent / "templates" / "index.html"
        tmpl_str = template_path.read_text(encoding="utf-8")
        # string.Template leaves CSS braces alone
        return Template(tmpl_str).substitute(
            APP_VERSION=APP_VERSION,
            endpoint_rows=endpoint_rows,
            screenshot_cards=render_cards(listing["screenshots"]),
            processed_cards=render_cards(listing["processed"]),
        )

    return app


# Expose a module-level Flask application for WSGI import paths like ``ledboard.app:app``.
app = create_app()
application = app
