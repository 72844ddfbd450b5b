# -*- coding: utf-8 -*-
"""Users domain (login by email, onboarding profile, symptom log)."""
