"""
Tail-risk diversification package.
Implements normal VaR/ES and the Conditional Diversification Benefit.
"""

from .tail_risk import value_at_risk, expected_shortfall
from .cdb import CDBCalculator, CDB_GRID_WEIGHTS, cdb, cdb_grid

__all__ = [
    'value_at_risk', 'expected_shortfall',
    'CDBCalculator', 'CDB_GRID_WEIGHTS', 'cdb', 'cdb_grid'
]
