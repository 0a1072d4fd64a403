"""
Preview Store
=============
Keeps selected review images on local disk until the review is submitted.

Each stored file is addressed by a random token. The token backs the preview
reference shown on the page; revoking it deletes the file. A token can only
be revoked once.
"""

import logging
import mimetypes
import re
import time
import uuid
from pathlib import Path
from typing import Optional, Tuple

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename


logger = logging.getLogger(__name__)

TOKEN_PATTERN = re.compile(r'^[0-9a-f]{32}$')


class PreviewStore:
    """Stores selected images under a draft-photo folder"""

    def __init__(self, root: str = 'data/draft_photos'):
        self.root = Path(root)
        self.root.mkdir(parents=True, exist_ok=True)

    def create(self, file: FileStorage) -> Tuple[str, str, str]:
        """
        Save an uploaded file and create a preview token for it.

        Args:
            file: Uploaded file from the request

        Returns:
            (token, original filename, mimetype)
        """
        filename = secure_filename(file.filename or '') or 'image'
        token = uuid.uuid4().hex
        suffix = Path(filename).suffix.lower()

        dest_path = self.root / f"{token}{suffix}"
        file.save(str(dest_path))

        mimetype = file.mimetype or mimetypes.guess_type(filename)[0] or 'application/octet-stream'
        logger.debug("[STORAGE] Stored preview %s (%s, %s)", token, filename, mimetype)
        return token, filename, mimetype

    def path_for(self, token: str) -> Optional[Path]:
        """Path of the file behind a token, or None if it was revoked or never existed"""
        if not TOKEN_PATTERN.match(token or ''):
            return None
        for path in self.root.glob(f"{token}*"):
            if path.is_file():
                return path
        return None

    def read(self, token: str) -> bytes:
        """Read the stored bytes for a token"""
        path = self.path_for(token)
        if path is None:
            raise FileNotFoundError(f"Preview not found: {token}")
        return path.read_bytes()

    def revoke(self, token: str) -> bool:
        """
        Release a preview reference and delete its file.

        Returns:
            True if the reference was released, False if it was already gone
        """
        path = self.path_for(token)
        if path is None:
            logger.warning("[STORAGE] Preview %s already released", token)
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("[STORAGE] Released preview %s", token)
        return True

    def purge_older_than(self, max_age: float, now: Optional[float] = None) -> int:
        """
        Delete stored images last written more than ``max_age`` seconds ago.

        Catches drafts whose visitor never came back (closed tab, expired
        session), which are never released through revoke.

        Returns:
            Number of files deleted
        """
        cutoff = (time.time() if now is None else now) - max_age
        purged = 0
        for path in self.root.iterdir():
            if not path.is_file() or not TOKEN_PATTERN.match(path.name[:32]):
                continue
            try:
                if path.stat().st_mtime < cutoff:
                    path.unlink()
                    purged += 1
            except FileNotFoundError:
                continue
        if purged:
            logger.info("[STORAGE] Purged %d stale preview(s)", purged)
        return purged
