"""In-memory dataset registry.

The registry is the single source of truth for the datasets of one session.
It is mutated synchronously by the tools; callers that serve several
sessions give each one its own registry.
"""

from __future__ import annotations

from typing import Iterator

from ..exceptions import DatasetNotFoundError, RegistryCapacityError
from ..logging import get_logger
from ..types import Dataset

logger = get_logger(__name__)

DEFAULT_MAX_DATASETS = 3


class DatasetRegistry:
    """Bounded, insertion-ordered collection of datasets keyed by id.

    Lookup is forgiving: ``resolve`` matches by id, then by name, and finally
    falls back to the most recently added dataset, so that an agent quoting a
    slightly wrong identifier still reaches the data it most likely meant.

    Usage:
        registry = DatasetRegistry(max_datasets=3)
        registry.add(Dataset.from_rows("sales.csv", rows))
        ds = registry.resolve("sales")   # falls back to sales.csv
    """

    def __init__(self, max_datasets: int = DEFAULT_MAX_DATASETS):
        if max_datasets < 1:
            raise ValueError("max_datasets must be at least 1")
        self.max_datasets = max_datasets
        self._datasets: dict[str, Dataset] = {}

    def __len__(self) -> int:
        return len(self._datasets)

    def __contains__(self, dataset_id: object) -> bool:
        return dataset_id in self._datasets

    def __iter__(self) -> Iterator[Dataset]:
        return iter(list(self._datasets.values()))

    @property
    def is_full(self) -> bool:
        return len(self._datasets) >= self.max_datasets

    def ids(self) -> list[str]:
        return list(self._datasets)

    def ensure_capacity(self) -> None:
        """Raise RegistryCapacityError if another dataset cannot be added.

        Loaders call this before doing any expensive work.
        """
        if self.is_full:
            raise RegistryCapacityError(self.max_datasets)

    def add(self, dataset: Dataset) -> Dataset:
        """Register a new dataset.

        A dataset whose id is already registered is moved to the most recent
        position and replaced, without counting against the limit twice.

        Raises:
            RegistryCapacityError: If the registry is already full.
        """
        if dataset.id in self._datasets:
            del self._datasets[dataset.id]
        else:
            self.ensure_capacity()
        self._datasets[dataset.id] = dataset
        logger.info(
            "Registered dataset %s (%d rows, %d columns)",
            dataset.id, dataset.row_count, len(dataset.columns),
        )
        return dataset

    def remove(self, dataset_id: str) -> bool:
        """Remove a dataset by id. Returns False when nothing was removed."""
        removed = self._datasets.pop(dataset_id, None)
        if removed is not None:
            logger.info("Removed dataset %s", dataset_id)
        return removed is not None

    def clear(self) -> int:
        count = len(self._datasets)
        self._datasets.clear()
        return count

    def get(self, dataset_id: str) -> Dataset | None:
        """Exact lookup by id, without any fallback."""
        return self._datasets.get(dataset_id)

    def latest(self) -> Dataset | None:
        """The most recently added dataset, if any."""
        if not self._datasets:
            return None
        return next(reversed(self._datasets.values()))

    def find(self, reference: str | None) -> Dataset | None:
        """Match by exact id, then by exact name. No fallback."""
        if reference is None:
            return None
        if reference in self._datasets:
            return self._datasets[reference]
        for dataset in self._datasets.values():
            if dataset.name == reference:
                return dataset
        return None

    def resolve(self, reference: str | None) -> Dataset:
        """Resolve a dataset by id or name, else the most recently added one.

        Raises:
            DatasetNotFoundError: Only when the registry is empty.
        """
        dataset = self.find(reference)
        if dataset is not None:
            return dataset
        latest = self.latest()
        if latest is None:
            raise DatasetNotFoundError(reference, [])
        logger.debug("Dataset %r not matched, falling back to %s", reference, latest.id)
        return latest

    def replace(self, dataset_id: str, dataset: Dataset) -> None:
        """Swap the dataset stored under ``dataset_id`` keeping its position.

        Raises:
            DatasetNotFoundError: If ``dataset_id`` is not registered.
        """
        if dataset_id not in self._datasets:
            raise DatasetNotFoundError(dataset_id, self.ids())
        if dataset.id != dataset_id:
            raise ValueError(f"Replacement id {dataset.id!r} does not match {dataset_id!r}")
        self._datasets[dataset_id] = dataset
        logger.info("Replaced dataset %s (%d rows)", dataset_id, dataset.row_count)
