# -*- coding: utf-8 -*-
"""GastroHealth backend: symptom tracking and Gemini diet guidance for gastric conditions."""

__version__ = "1.0.0"
