"""
Destination dataset repository.

Loads the static destination dataset once per session and flattens its
named groups (countries, temples, beaches, ...) into a single record list.
The dataset may live behind an HTTP(S) URL or on the local filesystem.
"""

import asyncio
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Sequence

import httpx

from ..config import settings
from ..domain.entities import DestinationRecord
from ..domain.exceptions import DatasetUnavailableException
from ..metrics import track_dataset_load

logger = logging.getLogger(__name__)


class IDestinationRepository(ABC):
    """
    Abstract repository interface for destination data.

    Implementations must return the whole dataset or fail as a whole.
    """

    @abstractmethod
    async def load_all(self) -> List[DestinationRecord]:
        """
        Load every destination record.

        Returns:
            Flattened list of destination records

        Raises:
            DatasetUnavailableException: If the dataset cannot be loaded
        """
        pass

    def get_stats(self) -> dict:
        """Get repository status; implementations may report more."""
        return {}


class DestinationRepository(IDestinationRepository):
    """
    Session-cached destination repository.

    The first successful load is kept for the lifetime of the repository.
    Callers arriving while the first fetch is in flight share it. A failed
    load is not cached, so the next search tries again.

    Attributes:
        source: Dataset URL or filesystem path
        groups: Dataset groups flattened into records, in order
        timeout: HTTP timeout in seconds
        load_count: Number of fetches actually performed
    """

    def __init__(
        self,
        source: Optional[str] = None,
        groups: Optional[Sequence[str]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize repository.

        Args:
            source: Dataset URL or path (defaults to settings)
            groups: Group names to flatten (defaults to settings)
            timeout: HTTP timeout in seconds (defaults to settings)
            client: Pre-configured HTTP client; created lazily when omitted
        """
        self.source = source or settings.DATASET_URL
        self.groups = list(groups or settings.DATASET_GROUPS)
        self.timeout = timeout or settings.REQUEST_TIMEOUT
        self.load_count = 0

        self._client = client
        self._owns_client = client is None
        self._records: Optional[List[DestinationRecord]] = None
        self._inflight: Optional["asyncio.Task[List[DestinationRecord]]"] = None

    @property
    def is_loaded(self) -> bool:
        return self._records is not None

    @property
    def is_remote(self) -> bool:
        return self.source.startswith(("http://", "https://"))

    async def load_all(self) -> List[DestinationRecord]:
        if self._records is not None:
            return list(self._records)

        if self._inflight is None:
            self._inflight = asyncio.create_task(self._load())

        records = await asyncio.shield(self._inflight)
        return list(records)

    async def _load(self) -> List[DestinationRecord]:
        """Fetch, parse and cache the dataset."""
        self.load_count += 1
        try:
            document = await self._fetch_document()
            records = self._flatten(document)
        except DatasetUnavailableException as e:
            track_dataset_load(success=False)
            logger.error(f"Dataset load failed: {e.message}")
            raise
        finally:
            self._inflight = None

        self._records = records
        track_dataset_load(success=True)
        logger.info(
            f"Loaded {len(records)} destinations from {self.source} "
            f"({len(self.groups)} groups)"
        )
        return records

    async def _fetch_document(self) -> Any:
        if self.is_remote:
            return await self._fetch_remote()
        return await self._read_local()

    async def _fetch_remote(self) -> Any:
        client = await self._get_client()
        try:
            response = await client.get(self.source)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise DatasetUnavailableException(
                self.source, f"HTTP error {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise DatasetUnavailableException(
                self.source, str(e) or type(e).__name__
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise DatasetUnavailableException(self.source, "invalid JSON") from e

    async def _read_local(self) -> Any:
        path = Path(self.source)
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except OSError as e:
            raise DatasetUnavailableException(self.source, str(e)) from e
        except UnicodeDecodeError as e:
            raise DatasetUnavailableException(self.source, "invalid UTF-8") from e

        try:
            return json.loads(text)
        except ValueError as e:
            raise DatasetUnavailableException(self.source, "invalid JSON") from e

    def _flatten(self, document: Any) -> List[DestinationRecord]:
        """
        Flatten the known dataset groups into one record list.

        Missing groups are skipped; unknown top-level keys are ignored.
        Any malformed group or record fails the whole load.
        """
        if not isinstance(document, dict):
            raise DatasetUnavailableException(
                self.source, "top-level JSON value must be an object"
            )

        records: List[DestinationRecord] = []
        for group in self.groups:
            entries = document.get(group)
            if entries is None:
                logger.debug(f"Dataset group '{group}' not present")
                continue
            if not isinstance(entries, list):
                raise DatasetUnavailableException(
                    self.source, f"group '{group}' must be a list"
                )
            for index, entry in enumerate(entries):
                records.append(self._to_record(group, index, entry))

        return records

    def _to_record(self, group: str, index: int, entry: Any) -> DestinationRecord:
        if not isinstance(entry, dict):
            raise DatasetUnavailableException(
                self.source, f"{group}[{index}] must be an object"
            )

        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise DatasetUnavailableException(
                self.source, f"{group}[{index}] is missing a name"
            )

        description = entry.get("description")
        image_url = entry.get("imageUrl")

        return DestinationRecord(
            id=str(entry.get("id") or name),
            name=name,
            description=str(description) if description is not None else None,
            categories=self._coerce_categories(entry.get("categories")),
            image_url=str(image_url) if image_url else None,
            group=group,
        )

    @staticmethod
    def _coerce_categories(raw: Any) -> tuple:
        # Tags are not interpreted here; the scorer decides what is malformed.
        if raw is None:
            return ()
        if isinstance(raw, (list, tuple)):
            return tuple(raw)
        return (raw,)

    async def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client used for remote datasets.

        Returns:
            Configured httpx.AsyncClient instance
        """
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
            logger.debug("Created HTTP client for dataset fetch")
        return self._client

    async def close(self) -> None:
        """Release the HTTP client if this repository created it."""
        if self._owns_client and self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            logger.info("Dataset HTTP client closed")

    def get_stats(self) -> dict:
        """
        Get repository status.

        Returns:
            Dictionary with source, cache and load statistics
        """
        return {
            "source": self.source,
            "groups": self.groups,
            "loaded": self.is_loaded,
            "records": len(self._records) if self._records is not None else 0,
            "load_count": self.load_count,
        }
