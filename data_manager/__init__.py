"""
Data management package for hedge analytics.
Handles validation and alignment of return series.
"""

from .data_validator import DataValidator, MIN_OBSERVATIONS

__all__ = ['DataValidator', 'MIN_OBSERVATIONS']
