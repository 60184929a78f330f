"""Infrastructure helpers for capture, storage and responses."""

from .capture import CaptureClient
from .responses import send_image
from .storage import ImageStore, gallery

__all__ = [
    "CaptureClient",
    "ImageStore",
    "gallery",
    "send_image",
]
