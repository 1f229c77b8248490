"""
Hedge ratios, hedging effectiveness and optimal portfolio weights from a
conditional covariance path (Basher & Sadorsky, 2016).
"""

import logging
import numpy as np
import pandas as pd

from data_manager.data_validator import MIN_OBSERVATIONS
from exceptions import InsufficientDataError
from models import HedgeSummary
from .models import CovariancePath

logger = logging.getLogger(__name__)


class HedgeEffectivenessAnalyzer:
    """Derives hedge statistics from DCC conditional covariances"""

    def __init__(self, min_observations: int = MIN_OBSERVATIONS):
        """
        Args:
            min_observations: Shortest covariance path accepted
        """
        self.min_observations = min_observations
        self.logger = logging.getLogger('garch.effectiveness')

    def _check_length(self, path: CovariancePath):
        if len(path) < self.min_observations:
            raise InsufficientDataError(len(path), self.min_observations)

    def _series(self, values: np.ndarray, path: CovariancePath, name: str) -> pd.Series:
        return pd.Series(values, index=path.index, name=name)

    def hedge_ratios(self, path: CovariancePath) -> pd.Series:
        """beta_t = Sigma_12,t / Sigma_22,t"""
        self._check_length(path)
        return self._series(path.c12 / path.v2, path, 'beta')

    def effectiveness(self, path: CovariancePath) -> float:
        """
        Conditional hedging effectiveness.

        HE = 1 - mean(v1 - c12^2 / v2) / mean(v1)

        Compares the time-averaged variance of the hedged position with the
        time-averaged unhedged variance.
        """
        self._check_length(path)
        hedged_var = path.v1 - path.c12 ** 2 / path.v2
        return float(1 - np.mean(hedged_var) / np.mean(path.v1))

    def optimal_weights(self, path: CovariancePath) -> pd.Series:
        """
        Variance-minimizing weight of the hedged asset, clipped to [0, 1].

        w_t = (v2 - c12) / (v1 - 2 c12 + v2)
        """
        self._check_length(path)
        raw = (path.v2 - path.c12) / (path.v1 - 2 * path.c12 + path.v2)
        clipped = np.clip(raw, 0, 1)

        n_clipped = int(np.sum(raw != clipped))
        if n_clipped > 0:
            self.logger.warning(f"Clipped {n_clipped} of {len(raw)} optimal weights to [0, 1]")

        return self._series(clipped, path, 'weight')

    def summarize(self, path: CovariancePath) -> HedgeSummary:
        """
        Summarize a covariance path.

        Returns:
            HedgeSummary with beta mean/min/max, HE, and OPW, the mean weight
            of the hedging asset
        """
        try:
            self._check_length(path)
            beta = self.hedge_ratios(path)
            he = self.effectiveness(path)
            opw = 1 - float(self.optimal_weights(path).mean())

            summary = HedgeSummary(
                beta_mean=float(beta.mean()),
                beta_min=float(beta.min()),
                beta_max=float(beta.max()),
                HE=he,
                OPW=opw
            )

            self.logger.info(
                f"Hedge summary over {len(path)} observations:\n"
                f"  Beta (mean): {summary.beta_mean:.4f}\n"
                f"  Beta (min):  {summary.beta_min:.4f}\n"
                f"  Beta (max):  {summary.beta_max:.4f}\n"
                f"  HE:          {summary.HE:.4f}\n"
                f"  OPW:         {summary.OPW:.4f}"
            )
            return summary

        except Exception as e:
            self.logger.error(f"Error summarizing covariance path: {str(e)}")
            raise


def hedge_effectiveness(path: CovariancePath,
                        min_observations: int = MIN_OBSERVATIONS) -> HedgeSummary:
    """HedgeSummary (beta_mean, beta_min, beta_max, HE, OPW) for a covariance path"""
    return HedgeEffectivenessAnalyzer(min_observations=min_observations).summarize(path)
