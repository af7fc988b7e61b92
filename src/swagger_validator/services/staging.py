"""Ephemeral on-disk staging of submitted documents.

Each staged artifact has a per-request unique name, is written with the
configured text encoding, and is removed by the request that created it on
every exit path.  A failed removal is logged and never replaces the outcome
the request already reached.
"""
from __future__ import annotations

import asyncio
import logging
import os
import tempfile
import time
import uuid
from contextlib import asynccontextmanager, contextmanager
from pathlib import Path
from typing import AsyncIterator, Iterator

from src.shared.constants import STAGED_ARTIFACT_PREFIX, STAGED_ARTIFACT_SUFFIX
from src.shared.errors import ArtifactIOError

logger = logging.getLogger(__name__)


def artifact_name() -> str:
    """Return a unique file name for a staged document."""
    return (
        f"{STAGED_ARTIFACT_PREFIX}{time.time_ns()}-{uuid.uuid4().hex[:8]}"
        f"{STAGED_ARTIFACT_SUFFIX}"
    )


def resolve_temp_dir(temp_dir: str | None) -> Path:
    return Path(temp_dir) if temp_dir else Path(tempfile.gettempdir())


def write_artifact(text: str, temp_dir: str | None, encoding: str = "utf-8") -> Path:
    """Write *text* to a freshly named file and return its path.

    The file is opened in exclusive-create mode so two requests can never
    share an artifact even if their names collided.
    """
    path = resolve_temp_dir(temp_dir) / artifact_name()
    try:
        with open(path, "x", encoding=encoding, newline="") as fh:
            fh.write(text)
    except (OSError, UnicodeEncodeError) as exc:
        # A partially written file still belongs to this request
        remove_artifact(path)
        raise ArtifactIOError(f"Could not stage document: {exc}") from exc
    logger.debug("Staged document", extra={"artifact": str(path)})
    return path


def remove_artifact(path: Path) -> bool:
    """Delete a staged artifact.  Returns False when removal failed."""
    try:
        path.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning(
            "Failed to remove staged document: %s", exc,
            extra={"kind": ArtifactIOError.kind, "artifact": str(path)},
        )
        return False
    return True


@contextmanager
def staged_artifact(
    text: str,
    temp_dir: str | None = None,
    encoding: str = "utf-8",
) -> Iterator[Path]:
    """Stage *text* on disk for the duration of the ``with`` block."""
    path = write_artifact(text, temp_dir, encoding)
    try:
        yield path
    finally:
        remove_artifact(path)


@asynccontextmanager
async def async_staged_artifact(
    text: str,
    temp_dir: str | None = None,
    encoding: str = "utf-8",
) -> AsyncIterator[Path]:
    """Async variant of :func:`staged_artifact`; file I/O runs off the loop."""
    path = await asyncio.to_thread(write_artifact, text, temp_dir, encoding)
    try:
        yield path
    finally:
        # Shielded so a cancelled request still removes its artifact
        await asyncio.shield(asyncio.to_thread(remove_artifact, path))


def list_artifacts(temp_dir: str | None = None) -> list[Path]:
    """Return staged artifacts currently present in *temp_dir*."""
    directory = resolve_temp_dir(temp_dir)
    return sorted(
        directory / name
        for name in os.listdir(directory)
        if name.startswith(STAGED_ARTIFACT_PREFIX)
        and name.endswith(STAGED_ARTIFACT_SUFFIX)
    )
