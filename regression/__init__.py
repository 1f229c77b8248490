"""
Regression post-processing package.
Linear-combination inference, BM10 tables and hedge/safe-haven classification.
"""

from .lincombo import linear_combination
from .bm10 import (BM10_LEVELS, BM10_TERMS, TAIL_QUANTILES,
                   build_bm10_regressors, bm10_table, resolve_terms)
from .adapters import from_arch_result, from_statsmodels_result
from .classifier import BM10Classifier, classify_bm10, DEFAULT_TOL, DEFAULT_SIGNIFICANCE

__all__ = [
    'linear_combination',
    'BM10_LEVELS', 'BM10_TERMS', 'TAIL_QUANTILES',
    'build_bm10_regressors', 'bm10_table', 'resolve_terms',
    'from_arch_result', 'from_statsmodels_result',
    'BM10Classifier', 'classify_bm10', 'DEFAULT_TOL', 'DEFAULT_SIGNIFICANCE'
]
