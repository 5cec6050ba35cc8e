"""Storage module - record store interface and implementations."""

from .interface import (
    RecordStore, StoreError, TABLES,
    MEDICAL_RECORDS, UPLOADED_PRESCRIPTIONS, CHECKUPS, MEDICATIONS,
)
from .local_storage import LocalRecordStore
from .supabase_storage import SupabaseRecordStore
from .factory import create_record_store, init_record_store, get_record_store

__all__ = [
    'RecordStore', 'StoreError', 'TABLES',
    'MEDICAL_RECORDS', 'UPLOADED_PRESCRIPTIONS', 'CHECKUPS', 'MEDICATIONS',
    'LocalRecordStore', 'SupabaseRecordStore',
    'create_record_store', 'init_record_store', 'get_record_store',
]
