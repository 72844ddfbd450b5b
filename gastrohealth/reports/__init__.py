# -*- coding: utf-8 -*-
"""
Health report module
"""

from .pdf_generator import PDFReportGenerator
from .summary import HealthSummary, build_summary

__all__ = [
    'PDFReportGenerator',
    'HealthSummary',
    'build_summary',
]
