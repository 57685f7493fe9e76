import logging
import os
import shutil
import time
from typing import Iterable, Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)


class FileStore:
    """Project attachments on local disk, stored under timestamp-prefixed names."""

    def __init__(self, upload_dir: str):
        self.upload_dir = os.path.abspath(upload_dir)
        os.makedirs(self.upload_dir, exist_ok=True)

    def _claim(self, original: str):
        """Create a new, empty file for ``original`` and return (name, handle)."""
        stamp = int(time.time() * 1000)
        while True:
            filename = f"{stamp}-{original}"
            try:
                return filename, open(os.path.join(self.upload_dir, filename), "xb")
            except FileExistsError:
                # Same name inside the same millisecond, move to the next free stamp
                stamp += 1

    def save(self, upload: UploadFile) -> str:
        original = os.path.basename(upload.filename or "upload")
        filename, out = self._claim(original)
        with out:
            shutil.copyfileobj(upload.file, out)

        logger.info("Stored upload %s as %s", upload.filename, filename)
        return filename

    def discard(self, filenames: Iterable[str]):
        for filename in filenames:
            path = self.path_for(filename)
            if path is None:
                continue
            try:
                os.remove(path)
            except OSError:
                logger.exception("Could not remove orphaned upload %s", filename)

    def path_for(self, filename: str) -> Optional[str]:
        # Only the last path component counts, nothing outside upload_dir is served
        path = os.path.join(self.upload_dir, os.path.basename(filename))
        if os.path.isfile(path):
            return path
        return None
