import asyncio
import json
import logging
import sqlite3
from pathlib import Path
from typing import Any

from . import config
from .db import get_item, set_item
from .models import Budget, Transaction

logger = logging.getLogger(__name__)

_STORAGE_ERRORS = (sqlite3.Error, OSError, RuntimeError)


class LedgerStore:
    """
    JSON lists persisted by key in the local key-value store.

    Every write replaces the whole list. Failures never propagate: a failed
    load yields an empty list and a failed save returns ``False``.
    """

    def __init__(self, store_path: Path | None = None) -> None:
        self.store_path = store_path

    @property
    def path(self) -> Path:
        return self.store_path or config.STORE_PATH

    def load(self, key: str) -> list[dict[str, Any]]:
        try:
            raw = get_item(key, self.path)
            if raw is None:
                return []
            records = json.loads(raw)
        except _STORAGE_ERRORS + (ValueError,):
            logger.exception("Failed to load %r from %s", key, self.path)
            return []
        if not isinstance(records, list):
            logger.error("Stored value for %r is not a JSON array, ignoring it", key)
            return []
        return records

    def save(self, key: str, records: list[dict[str, Any]]) -> bool:
        try:
            payload = json.dumps(list(records), ensure_ascii=False)
            set_item(key, payload, self.path)
        except _STORAGE_ERRORS + (TypeError, ValueError):
            logger.exception("Failed to save %r to %s", key, self.path)
            return False
        logger.debug("Saved %d record(s) under %r", len(records), key)
        return True

    async def aload(self, key: str) -> list[dict[str, Any]]:
        return await asyncio.to_thread(self.load, key)

    async def asave(self, key: str, records: list[dict[str, Any]]) -> bool:
        return await asyncio.to_thread(self.save, key, records)

    def load_budgets(self) -> list[Budget]:
        return _parse_records(self.load(config.BUDGETS_KEY), Budget)

    def load_transactions(self) -> list[Transaction]:
        return _parse_records(self.load(config.TRANSACTIONS_KEY), Transaction)

    def save_budgets(self, budgets: list[Budget]) -> bool:
        return self.save(config.BUDGETS_KEY, [b.to_dict() for b in budgets])

    def save_transactions(self, transactions: list[Transaction]) -> bool:
        return self.save(config.TRANSACTIONS_KEY, [t.to_dict() for t in transactions])


def _parse_records(raw_records, cls):
    parsed = []
    for raw in raw_records:
        try:
            parsed.append(cls.from_dict(raw))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Skipping malformed %s record %r: %s", cls.__name__, raw, e)
    return parsed
