"""
Local Record Store Implementation.
Keeps each table as a JSON array file under a base directory.
"""

import json
import logging
import aiofiles
from pathlib import Path
from typing import Optional, List, Dict, Any
from .interface import RecordStore, StoreError, validate_table

logger = logging.getLogger(__name__)


class LocalRecordStore(RecordStore):
    """
    Local filesystem record store.
    Suited to development and tests; the hosted store is used in production.
    """

    def __init__(self, base_dir: str = "./data"):
        """
        Initialize local storage with a base directory.

        Args:
            base_dir: Directory holding one <table>.json file per table
        """
        self.base_dir = Path(base_dir).resolve()
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _get_table_path(self, table: str) -> Path:
        """Resolve the JSON file for a table within the base directory."""
        full_path = (self.base_dir / f"{validate_table(table)}.json").resolve()

        # Security check: ensure path is within base_dir
        if full_path.parent != self.base_dir:
            raise ValueError(f"Invalid table path: {table} - path traversal detected")

        return full_path

    async def _load_table(self, table: str) -> List[Dict[str, Any]]:
        path = self._get_table_path(table)
        if not path.exists():
            return []
        try:
            async with aiofiles.open(path, 'r', encoding='utf-8') as f:
                rows = json.loads(await f.read())
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Cannot read table {table}: {e}") from e
        if not isinstance(rows, list):
            raise StoreError(f"Table {table} is not a JSON array")
        return rows

    async def _save_table(self, table: str, rows: List[Dict[str, Any]]) -> None:
        path = self._get_table_path(table)
        try:
            async with aiofiles.open(path, 'w', encoding='utf-8') as f:
                await f.write(json.dumps(rows, indent=2, ensure_ascii=False, default=str))
        except OSError as e:
            raise StoreError(f"Cannot write table {table}: {e}") from e

    async def select(
        self,
        table: str,
        user_id: str,
        order_by: Optional[str] = None,
        descending: bool = False
    ) -> List[Dict[str, Any]]:
        """Load a user's rows from the table file."""
        rows = [
            row for row in await self._load_table(table)
            if str(row.get("user_id")) == str(user_id)
        ]
        if order_by:
            # Nulls last in either direction
            present = [row for row in rows if row.get(order_by) is not None]
            missing = [row for row in rows if row.get(order_by) is None]
            present.sort(key=lambda row: str(row[order_by]), reverse=descending)
            rows = present + missing
        logger.debug(f"Loaded {len(rows)} rows from {table} for user {user_id}")
        return rows

    async def update(
        self,
        table: str,
        row_id: str,
        values: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Rewrite the table file with one row updated."""
        rows = await self._load_table(table)
        for row in rows:
            if str(row.get("id")) == str(row_id):
                row.update(values)
                await self._save_table(table, rows)
                return row
        return None

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Append a row; used to seed local data."""
        rows = await self._load_table(table)
        rows.append(row)
        await self._save_table(table, rows)
        return row
