"""
Record Store Interface - Abstract base class for all record store implementations.
This interface enables switching between the local JSON store and the hosted store.
"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Any

MEDICAL_RECORDS = "medical_records"
UPLOADED_PRESCRIPTIONS = "uploaded_prescriptions"
CHECKUPS = "checkups"
MEDICATIONS = "medications"

TABLES = frozenset({MEDICAL_RECORDS, UPLOADED_PRESCRIPTIONS, CHECKUPS, MEDICATIONS})


class StoreError(Exception):
    """Raised when the record store cannot be reached or rejects a request."""


def validate_table(table: str) -> str:
    """Reject anything that is not one of the known tables."""
    if table not in TABLES:
        raise ValueError(f"Unknown table: {table}")
    return table


class RecordStore(ABC):
    """
    Abstract record store that defines the contract for all implementations.
    Rows are plain dicts keyed by column name and always scoped to one user.
    """

    @abstractmethod
    async def select(
        self,
        table: str,
        user_id: str,
        order_by: Optional[str] = None,
        descending: bool = False
    ) -> List[Dict[str, Any]]:
        """
        Fetch every row of a table that belongs to a user.

        Args:
            table: One of the known table names
            user_id: Opaque user identifier
            order_by: Optional column to order by
            descending: Order direction when order_by is given

        Returns:
            List[Dict]: Matching rows

        Raises:
            StoreError: If the store is unavailable
        """
        pass

    @abstractmethod
    async def update(
        self,
        table: str,
        row_id: str,
        values: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Update one row by id.

        Args:
            table: One of the known table names
            row_id: Row identifier
            values: Columns to overwrite

        Returns:
            Optional[Dict]: The updated row, or None if no row has that id

        Raises:
            StoreError: If the store is unavailable
        """
        pass
