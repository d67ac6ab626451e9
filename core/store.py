"""Local JSON key-value store for the budget document."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from core.models import BudgetDocument
from core.serialization import document_from_dict, document_to_dict

__all__ = ["STORAGE_KEY", "BudgetStore"]

logger = logging.getLogger(__name__)

STORAGE_KEY = "budgetAppData"


class BudgetStore:
    """Persists one budget document under ``STORAGE_KEY`` in a JSON file.

    Other keys already present in the file are preserved on save.
    """

    def __init__(self, path: Path | str, key: str = STORAGE_KEY):
        self.path = Path(path)
        self.key = key

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError) as exc:
            logger.error("Error loading budget data from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring budget store %s: expected a JSON object", self.path)
            return {}
        return data

    def load(self) -> BudgetDocument:
        """Return the stored document, or an empty one when nothing usable is stored."""

        stored = self._read().get(self.key)
        if not isinstance(stored, dict):
            return BudgetDocument()
        return document_from_dict(stored)

    def save(self, document: BudgetDocument) -> None:
        """Write ``document`` to disk.

        Raises:
            OSError: If the file cannot be written
        """

        data = self._read()
        data[self.key] = document_to_dict(document)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, sort_keys=True)
        except OSError as exc:
            raise OSError(f"Failed to save budget data to {self.path}: {exc}") from exc
        logger.debug("Saved budget data to %s", self.path)

    def reset(self) -> BudgetDocument:
        document = BudgetDocument()
        self.save(document)
        return document
