"""
Dataset store.

Holds the NDVI dataset for the lifetime of the process. The dataset is loaded
once on a background worker; readers call ``get()`` and receive either the
dataset or the ``NOT_READY`` sentinel, never blocking on the load.
"""
from __future__ import annotations

import json
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from enum import Enum
from typing import Any, Optional, Union

import requests

from .config import DATA_SOURCE, FETCH_TIMEOUT
from .exceptions import LoadError
from .models import Dataset, parse_dataset

logger = logging.getLogger(__name__)


class StoreState(Enum):
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class NotReady(Enum):
    """Sentinel returned by ``DatasetStore.get`` until the load succeeds."""
    NOT_READY = "not-ready"

    def __bool__(self) -> bool:
        return False


NOT_READY = NotReady.NOT_READY


# ============================================================================
# FETCHING
# ============================================================================
def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_payload(source: str, timeout: float = FETCH_TIMEOUT) -> Any:
    """Read and decode the JSON payload from a file path or URL"""
    if _is_url(source):
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Failed to fetch {source}: {e}") from e
        try:
            return response.json()
        except ValueError as e:
            raise LoadError(f"Invalid JSON from {source}: {e}") from e

    try:
        with open(source, "r", encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        raise LoadError(f"Failed to read {source}: {e}") from e
    except ValueError as e:
        raise LoadError(f"Invalid JSON in {source}: {e}") from e


# ============================================================================
# STORE
# ============================================================================
class DatasetStore:
    """Process-wide holder of the NDVI dataset.

    Lifecycle: UNINITIALIZED -> LOADING -> READY | FAILED. The transition out
    of LOADING happens exactly once; a failed load is never retried.
    """

    def __init__(self, source: str = DATA_SOURCE, timeout: float = FETCH_TIMEOUT):
        self.source = source
        self.timeout = timeout
        self._lock = threading.Lock()
        self._state = StoreState.UNINITIALIZED
        self._dataset: Optional[Dataset] = None
        self._error: Optional[LoadError] = None
        self._future: Optional[Future] = None

    @property
    def state(self) -> StoreState:
        return self._state

    @property
    def error(self) -> Optional[LoadError]:
        return self._error

    def load(self) -> Future:
        """Start the load if it has not started yet.

        Returns a future resolving to the Dataset, or raising LoadError. Every
        call returns the same future.
        """
        with self._lock:
            if self._future is None:
                self._state = StoreState.LOADING
                logger.info("Loading NDVI data from %s", self.source)
                executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="ndvi-load")
                self._future = executor.submit(self._load)
                executor.shutdown(wait=False)
            return self._future

    def get(self) -> Union[Dataset, NotReady]:
        dataset = self._dataset
        return dataset if dataset is not None else NOT_READY

    def _load(self) -> Dataset:
        try:
            dataset = parse_dataset(fetch_payload(self.source, timeout=self.timeout))
        except Exception as e:
            error = e if isinstance(e, LoadError) else LoadError(f"Failed to load {self.source}: {e!r}")
            with self._lock:
                self._error = error
                self._state = StoreState.FAILED
            logger.error("Error loading NDVI data: %s", error)
            if error is e:
                raise
            raise error from e

        with self._lock:
            self._dataset = dataset
            self._state = StoreState.READY
        logger.info("NDVI data loaded: %d locations", len(dataset))
        return dataset
