"""
Record Store Factory - Creates the configured store and holds the process-wide instance.
"""

from typing import Any, Optional

from .interface import RecordStore
from .local_storage import LocalRecordStore
from .supabase_storage import SupabaseRecordStore


def create_record_store(config: Any) -> RecordStore:
    """
    Create a record store from settings.

    Args:
        config: Settings object with storage configuration

    Returns:
        RecordStore instance

    Raises:
        ValueError: If the storage type is unknown or the hosted store is not configured
    """
    if config.storage_type == "local":
        return LocalRecordStore(config.local_storage_path)

    elif config.storage_type == "supabase":
        if not config.supabase_url or not config.supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY are required for the supabase store")
        return SupabaseRecordStore(
            url=config.supabase_url,
            api_key=config.supabase_key,
            timeout=config.fetch_timeout_seconds,
        )

    else:
        raise ValueError(f"Unsupported storage type: {config.storage_type}")


# Global record store instance
_record_store: Optional[RecordStore] = None


def init_record_store(store: RecordStore) -> None:
    """Install the process-wide record store."""
    global _record_store
    _record_store = store


def get_record_store() -> RecordStore:
    """
    Get the process-wide record store.

    Raises:
        RuntimeError: If the store has not been initialized
    """
    if _record_store is None:
        raise RuntimeError("Record store not initialized. Call init_record_store() first.")
    return _record_store
