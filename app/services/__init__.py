# app/services - Business logic layer
from .export_service import ExportService

__all__ = ['ExportService']
