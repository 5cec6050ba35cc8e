"""Services module - per-user data access over the record store."""

from .medical_data import MedicalData, MedicalDataService, PrescriptionAnalyzer

__all__ = ['MedicalData', 'MedicalDataService', 'PrescriptionAnalyzer']
