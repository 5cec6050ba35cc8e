"""Patient Vault - medical timeline, vitals and trend aggregation."""

__version__ = "1.0.0"
