"""Session-scoped storage for downloadable archives."""

from __future__ import annotations

import secrets
import threading
from dataclasses import dataclass
from pathlib import Path

from flask import current_app

from .io import TempDir, new_tmpfs_dir
from .logging import get_logger

logger = get_logger()

EXTENSION_KEY = "split_artifacts"


@dataclass(slots=True)
class Artifact:
    token: str
    owner: str
    download_name: str
    size_bytes: int
    workdir: TempDir

    @property
    def path(self) -> Path:
        return self.workdir.path / "artifact.bin"

    def read_bytes(self) -> bytes:
        return self.path.read_bytes()


class ArtifactStore:
    """Holds at most one artifact per owner.

    Publishing a new artifact releases the owner's previous one, including its
    files on disk.
    """

    def __init__(self, root: Path):
        self.root = Path(root)
        self._by_owner: dict[str, Artifact] = {}
        self._lock = threading.Lock()

    def publish(self, owner: str, data: bytes, download_name: str) -> Artifact:
        workdir = new_tmpfs_dir(self.root, prefix="artifact-")
        artifact = Artifact(
            token=secrets.token_urlsafe(16),
            owner=owner,
            download_name=download_name,
            size_bytes=len(data),
            workdir=workdir,
        )
        artifact.path.write_bytes(data)
        with self._lock:
            previous = self._by_owner.get(owner)
            self._by_owner[owner] = artifact
        if previous is not None:
            previous.workdir.cleanup()
        logger.info("published artifact %s (%s bytes)", download_name, len(data))
        return artifact

    def get(self, owner: str, token: str) -> Artifact | None:
        with self._lock:
            artifact = self._by_owner.get(owner)
        if artifact is None or not secrets.compare_digest(artifact.token, token):
            return None
        return artifact

    def release(self, owner: str) -> bool:
        with self._lock:
            artifact = self._by_owner.pop(owner, None)
        if artifact is None:
            return False
        artifact.workdir.cleanup()
        return True

    def clear(self) -> None:
        with self._lock:
            artifacts = list(self._by_owner.values())
            self._by_owner.clear()
        for artifact in artifacts:
            artifact.workdir.cleanup()

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_owner)


def current_store() -> ArtifactStore:
    """Return the artifact store registered on the active application."""

    return current_app.extensions[EXTENSION_KEY]


__all__ = ["EXTENSION_KEY", "Artifact", "ArtifactStore", "current_store"]
