"""
Load controller: writes extracted records to the store at most once per catalog.
"""
from __future__ import annotations

from typing import Iterable

from .completion import CompletionStore
from .errors import IndexCreationError, WriteError
from .logger import get_logger
from .models import LoadOutcome, Loaded, PartialFailure, ProductRecord, Skipped
from .store.base import DocumentStore

logger = get_logger(__name__)


class LoadController:
    """
    Best-effort bulk loader guarded by a completion marker.

    Once the marker is set the catalog is never written again through this
    path. The marker is set after every write pass, including passes where
    some writes failed: records that failed to write are not retried unless
    the marker is removed by hand.
    """

    def __init__(self, store: DocumentStore, completion: CompletionStore, index: str) -> None:
        self.store = store
        self.completion = completion
        self.index = index

    def ensure_index(self) -> bool:
        """
        Create the index from the record shape if it does not exist yet.

        Returns:
            True if the index was created by this call

        Raises:
            IndexCreationError: the index could not be checked or created
        """
        if self.store.index_exists(self.index):
            logger.debug("Index %s already exists", self.index)
            return False
        self.store.create_index(self.index, ProductRecord.index_mappings())
        return True

    def ensure_indexed(self, records: Iterable[ProductRecord]) -> LoadOutcome:
        """
        Write ``records`` unless this catalog was already loaded.

        Raises:
            IndexCreationError: nothing was written and the marker is left unset
        """
        if self.completion.exists():
            logger.info("Catalog already indexed (%s), skipping load", self.completion)
            return Skipped()

        try:
            self.ensure_index()
        except IndexCreationError as e:
            logger.error("Error creating index %s, no products written: %s", self.index, e)
            raise

        loaded = 0
        failed = 0
        for record in records:
            try:
                self.store.upsert(self.index, record.to_dict())
            except WriteError as e:
                failed += 1
                logger.error("Error indexing product %r: %s", record.name, e)
                continue
            loaded += 1

        self.completion.mark()

        if failed:
            logger.error(
                "Indexed %d product(s), %d failed; catalog marked done and failed products will not be retried",
                loaded, failed,
            )
            return PartialFailure(failed_count=failed, loaded_count=loaded)

        logger.info("Indexed %d product(s) into %s", loaded, self.index)
        return Loaded(count=loaded)


__all__ = ["LoadController"]
