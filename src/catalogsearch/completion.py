"""
Completion markers: persisted "this catalog has been loaded" flags.
"""
from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from .logger import get_logger

logger = get_logger(__name__)


class CompletionStore(ABC):
    """A single persisted flag scoped to one catalog."""

    @abstractmethod
    def exists(self) -> bool:
        """Return True if the catalog has already been loaded."""

    @abstractmethod
    def mark(self) -> None:
        """Record that the catalog has been loaded. Never cleared here."""


class FileCompletionStore(CompletionStore):
    """
    Marker kept as an empty file, e.g. ``flags/indexing_done_26.flag``.

    The file name carries the catalog version, so switching to a new target
    only needs a new name; old markers can stay where they are.
    """

    def __init__(self, directory: Union[str, Path], name: str) -> None:
        self.path = Path(directory) / name

    def exists(self) -> bool:
        return self.path.exists()

    def mark(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            fd = os.open(self.path, os.O_CREAT | os.O_EXCL | os.O_WRONLY)
        except FileExistsError:
            logger.warning("Completion marker %s was already set by another run", self.path)
            return
        os.close(fd)
        logger.info("Completion marker set: %s", self.path)

    def __repr__(self) -> str:
        return f"FileCompletionStore({str(self.path)!r})"


__all__ = ["CompletionStore", "FileCompletionStore"]
