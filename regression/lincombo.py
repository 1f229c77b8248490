"""Inference on sums of regression coefficients"""

import logging
import numpy as np
from scipy.stats import norm
from typing import Sequence

from exceptions import UnknownTermError
from models import CoefficientEstimate, LinComboResult

logger = logging.getLogger(__name__)


def linear_combination(estimate: CoefficientEstimate, terms: Sequence[str]) -> LinComboResult:
    """
    Sum the named coefficients and test the sum against zero.

    With L the 0/1 selector of `terms`, the estimate is L'b, its variance
    L'VL, and the two-sided p-value uses the standard normal.

    Args:
        estimate: Coefficient vector and covariance matrix
        terms: Coefficient names to include in the sum

    Returns:
        LinComboResult(estimate, std_error, z_stat, p_value)
    """
    if isinstance(terms, str):
        terms = [terms]

    names = estimate.params.index
    unknown = [term for term in terms if term not in names]
    if unknown:
        raise UnknownTermError(unknown)

    selector = np.zeros(len(names))
    selector[names.get_indexer(list(terms))] = 1.0

    coefs = estimate.params.to_numpy(dtype=float)
    cov = estimate.cov.to_numpy(dtype=float)

    value = float(selector @ coefs)
    std_error = float(np.sqrt(selector @ cov @ selector))
    z_stat = value / std_error
    p_value = float(2 * norm.cdf(-abs(z_stat)))

    logger.debug(
        f"Linear combination of {', '.join(terms)}: "
        f"est={value:.6f} se={std_error:.6f} z={z_stat:.3f} p={p_value:.4f}"
    )

    return LinComboResult(
        estimate=value,
        std_error=std_error,
        z_stat=float(z_stat),
        p_value=p_value
    )
