# -*- coding: utf-8 -*-
"""Recipe library."""
