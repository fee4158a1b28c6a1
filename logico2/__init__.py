# logico2/__init__.py
# -*- coding: utf-8 -*-
"""LogiCO2: road-freight CO2 estimator and Brazilian route resolver."""

__version__ = "1.0.0"
