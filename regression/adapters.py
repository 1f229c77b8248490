"""Convert fitted model results into coefficient estimates"""

import logging
import pandas as pd
from arch.univariate.base import ARCHModelResult

from models import CoefficientEstimate

logger = logging.getLogger(__name__)


def from_arch_result(result: ARCHModelResult) -> CoefficientEstimate:
    """
    Build a CoefficientEstimate from an `arch` ARCHModelResult.

    Exogenous regressors passed to `arch_model(y, x=X, mean='LS')` keep the
    column names of X, so BM10 terms are found under those names.
    """
    params = pd.Series(result.params, dtype=float)
    cov = pd.DataFrame(result.param_cov, dtype=float)
    cov = cov.loc[params.index, params.index]

    logger.info(f"Loaded {len(params)} coefficients from arch result")
    return CoefficientEstimate(params=params, cov=cov)


def from_statsmodels_result(result) -> CoefficientEstimate:
    """Build a CoefficientEstimate from a statsmodels regression result"""
    params = result.params
    if not isinstance(params, pd.Series):
        # Fitted on plain arrays: statsmodels names them const, x1, x2, ...
        params = pd.Series(params, index=result.model.exog_names)
    params = params.astype(float)

    cov = result.cov_params()
    if not isinstance(cov, pd.DataFrame):
        cov = pd.DataFrame(cov, index=params.index, columns=params.index)
    cov = cov.loc[params.index, params.index].astype(float)

    logger.info(f"Loaded {len(params)} coefficients from statsmodels result")
    return CoefficientEstimate(params=params, cov=cov)
