"""
GARCH/DCC post-processing package.
Hedge ratios and hedging effectiveness from conditional covariance paths.
"""

from .models import CovariancePath
from .effectiveness import HedgeEffectivenessAnalyzer, hedge_effectiveness

__all__ = ['CovariancePath', 'HedgeEffectivenessAnalyzer', 'hedge_effectiveness']
