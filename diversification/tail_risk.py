"""Parametric Value-at-Risk and Expected Shortfall under a normal approximation"""

import numpy as np
from scipy.stats import norm

from exceptions import ValidationError


def _check_inputs(sd: float, p: float):
    if not np.isfinite(p) or not 0 < p < 1:
        raise ValidationError('p', "must be a scalar in (0,1).")
    if not sd >= 0:
        raise ValidationError('sd', "must be non-negative.")


def value_at_risk(mean: float, sd: float, p: float) -> float:
    """
    Normal VaR evaluated on the upper tail of the return distribution.

    VaR(p) = mean + sd * Phi^-1(1 - p)

    Args:
        mean: Mean return
        sd: Standard deviation of returns (>= 0)
        p: Tail probability in (0, 1), e.g. 0.05

    Returns:
        VaR in return units
    """
    _check_inputs(sd, p)
    return float(mean + sd * norm.ppf(1 - p))


def expected_shortfall(mean: float, sd: float, p: float) -> float:
    """
    Normal ES evaluated on the upper tail of the return distribution.

    ES(p) = mean + sd * phi(Phi^-1(1 - p)) / p
    """
    _check_inputs(sd, p)
    return float(mean + sd * norm.pdf(norm.ppf(1 - p)) / p)
