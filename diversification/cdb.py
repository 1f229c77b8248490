"""
Conditional Diversification Benefit (Christoffersen et al., 2012; 2018)
for a two-asset portfolio using normal-theory VaR/ES with plug-in moments.
"""

import logging
import numpy as np
import pandas as pd
from typing import Dict, Optional, Tuple

from data_manager.data_validator import DataValidator
from .tail_risk import expected_shortfall, value_at_risk

logger = logging.getLogger(__name__)

CDB_GRID_WEIGHTS = {
    'w05': 0.05,
    'w10': 0.10,
    'w20': 0.20
}


class CDBCalculator:
    """Computes the CDB for single weights or the fixed weight grid"""

    def __init__(self, validator: Optional[DataValidator] = None):
        self.validator = validator or DataValidator()
        self.logger = logging.getLogger('diversification.cdb')

    @staticmethod
    def _moments(x: np.ndarray, y: np.ndarray) -> Tuple[float, float, float, float]:
        """Plug-in means and sample standard deviations"""
        return (
            float(np.mean(x)), float(np.std(x, ddof=1)),
            float(np.mean(y)), float(np.std(y, ddof=1))
        )

    @staticmethod
    def _benefit(mean_x: float, sd_x: float, es_x: float,
                 mean_y: float, sd_y: float, es_y: float,
                 p: float, w: float) -> float:
        # Portfolio moments without a covariance term
        mean_p = w * mean_x + (1 - w) * mean_y
        sd_p = np.sqrt((w * sd_x) ** 2 + ((1 - w) * sd_y) ** 2)

        es_p = expected_shortfall(mean_p, sd_p, p)
        var_p = value_at_risk(mean_p, sd_p, p)

        numerator = (w * es_x) + ((1 - w) * es_y) - es_p
        denominator = (w * es_x) + ((1 - w) * es_y) - var_p
        return float(numerator / denominator)

    def calculate(self, x, y, p: float, w: float) -> float:
        """
        CDB at a single portfolio weight.

        Args:
            x: Returns of asset X
            y: Returns of asset Y
            p: Tail probability in (0, 1), e.g. 0.05
            w: Weight on X in [0, 1]; Y receives 1 - w

        Returns:
            CDB(w, p) as a float
        """
        x = self.validator.validate_returns(x, 'x')
        y = self.validator.validate_returns(y, 'y')
        p = self.validator.validate_probability(p)
        w = self.validator.validate_weight(w)

        mean_x, sd_x, mean_y, sd_y = self._moments(x, y)
        es_x = expected_shortfall(mean_x, sd_x, p)
        es_y = expected_shortfall(mean_y, sd_y, p)

        value = self._benefit(mean_x, sd_x, es_x, mean_y, sd_y, es_y, p, w)
        self.logger.debug(f"CDB(w={w:.2f}, p={p:.2f}) = {value:.6f}")
        return value

    def calculate_grid(self, x, y, p: float,
                       weights: Dict[str, float] = None) -> pd.Series:
        """
        CDB over the fixed weight grid, reusing the marginal ES values.

        Returns:
            Series indexed 'w05', 'w10', 'w20'
        """
        if weights is None:
            weights = CDB_GRID_WEIGHTS

        x = self.validator.validate_returns(x, 'x')
        y = self.validator.validate_returns(y, 'y')
        p = self.validator.validate_probability(p)
        for key, w in weights.items():
            self.validator.validate_weight(w, key)

        mean_x, sd_x, mean_y, sd_y = self._moments(x, y)
        es_x = expected_shortfall(mean_x, sd_x, p)
        es_y = expected_shortfall(mean_y, sd_y, p)

        result = pd.Series(
            {key: self._benefit(mean_x, sd_x, es_x, mean_y, sd_y, es_y, p, w)
             for key, w in weights.items()},
            name='CDB',
            dtype=float
        )

        self.logger.info(
            f"CDB grid at p={p:.2f}: "
            + ", ".join(f"{k}={v:.4f}" for k, v in result.items())
        )
        return result


def cdb(x, y, p: float, w: float) -> float:
    """Conditional Diversification Benefit at weight `w` on X"""
    return CDBCalculator().calculate(x, y, p, w)


def cdb_grid(x, y, p: float) -> pd.Series:
    """Conditional Diversification Benefit at w = 0.05, 0.10, 0.20"""
    return CDBCalculator().calculate_grid(x, y, p)
