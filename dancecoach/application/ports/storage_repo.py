from typing import Protocol


class StorageRepository(Protocol):
    def save_bytes(self, subdir: str, filename: str, data: bytes) -> str:
        """Persist the bytes and return the public URL they are served from."""
        ...
