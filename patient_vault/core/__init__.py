"""Core module - timeline aggregation, filtering, vitals and trend logic."""
