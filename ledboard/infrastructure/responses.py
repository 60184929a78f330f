from __future__ import annotations

import io

from flask import send_file

from ..processing.codec import MIMETYPES, normalize_format


def send_image(data: bytes, fmt: str = "png"):
    return send_file(io.BytesIO(data), mimetype=MIMETYPES[normalize_format(fmt)])
