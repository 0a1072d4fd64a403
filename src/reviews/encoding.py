"""Convert selected review images into data URLs for the review API."""

import base64
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Sequence

from .form import ImageEntry
from ..storage.preview_store import PreviewStore


logger = logging.getLogger(__name__)


def to_data_url(data: bytes, mimetype: str) -> str:
    """Encode raw bytes as a base64 data URL"""
    encoded = base64.b64encode(data).decode('ascii')
    return f"data:{mimetype};base64,{encoded}"


def encode_images(
    images: Sequence[ImageEntry],
    store: PreviewStore,
    max_workers: int = 4
) -> List[str]:
    """
    Encode every image entry to a data URL.

    All reads are started together and the call returns once every one of
    them has finished. Results keep the order of ``images``. The first
    failure propagates to the caller.
    """
    if not images:
        return []

    def encode(entry: ImageEntry) -> str:
        return to_data_url(store.read(entry.token), entry.mimetype)

    workers = max(1, min(max_workers, len(images)))
    with ThreadPoolExecutor(max_workers=workers) as executor:
        encoded = list(executor.map(encode, images))

    logger.info("[REVIEWS] Encoded %d image(s)", len(encoded))
    return encoded
