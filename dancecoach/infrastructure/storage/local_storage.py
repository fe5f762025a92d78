import os
import re
from datetime import datetime, timezone
from typing import Optional

from ...core.config import settings
from ...application.ports.storage_repo import StorageRepository

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


class LocalStorageRepository(StorageRepository):
    def __init__(self, upload_dir: Optional[str] = None, base_url: Optional[str] = None) -> None:
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self.base_url = (base_url or settings.BASE_URL).rstrip("/")

    def save_bytes(self, subdir: str, filename: str, data: bytes) -> str:
        safe_name = _UNSAFE_CHARS.sub("_", os.path.basename(filename or "video.mp4"))
        timestamped = f"{int(datetime.now(timezone.utc).timestamp() * 1000)}-{safe_name}"
        dest_dir = os.path.join(self.upload_dir, subdir) if subdir else self.upload_dir
        os.makedirs(dest_dir, exist_ok=True)
        path = os.path.join(dest_dir, timestamped)
        with open(path, "wb") as f:
            f.write(data)
        relative = "/".join(p for p in (os.path.basename(self.upload_dir), subdir, timestamped) if p)
        return f"{self.base_url}/{relative}"
