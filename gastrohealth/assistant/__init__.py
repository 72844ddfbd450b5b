# -*- coding: utf-8 -*-
"""Assistant domain: Gemini-backed meal plans, food checks, trigger analysis and recipes."""
