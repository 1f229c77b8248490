"""
Hedge coefficient tables following Baur & McDermott (2010).

The mean equation of the hedging asset is

    r_hedge,t = a + b_t * r_m,t + e_t
    b_t = c0 + c1 D(r_m <= q10) + c2 D(r_m <= q5) + c3 D(r_m <= q1)

with a GARCH(1,1) variance. The regression itself is fitted elsewhere;
this module builds its regressors and turns the fitted coefficients into
cumulative hedge coefficients per tail level.
"""

import logging
import re
import numpy as np
import pandas as pd
from typing import Dict, Optional, Sequence

from data_manager.data_validator import DataValidator
from exceptions import StructuralError, UnknownTermError
from models import CoefficientEstimate
from .lincombo import linear_combination

logger = logging.getLogger(__name__)

BM10_LEVELS = ('c0', '0.10', '0.05', '0.01')
TAIL_QUANTILES = (0.10, 0.05, 0.01)
BM10_TERMS = ('rm', 'rm_D10', 'rm_D05', 'rm_D01')


def build_bm10_regressors(hedged, hedge,
                          quantiles: Sequence[float] = TAIL_QUANTILES,
                          validator: Optional[DataValidator] = None) -> pd.DataFrame:
    """
    Build the dependent variable and tail-interaction regressors.

    Args:
        hedged: Returns of the hedged (market) asset, the driver rm
        hedge: Returns of the hedging asset, the dependent variable y
        quantiles: Lower-tail quantile levels for the dummies

    Returns:
        DataFrame with columns y, rm and one rm_Dxx column per quantile
    """
    validator = validator or DataValidator()
    aligned = validator.align_pair(hedged, hedge)
    rm = aligned['hedged'].to_numpy()

    data = pd.DataFrame({'y': aligned['hedge'], 'rm': aligned['hedged']}, index=aligned.index)
    for level in quantiles:
        threshold = np.quantile(rm, level)
        dummy = (rm <= threshold).astype(float)
        column = f"rm_D{int(round(level * 100)):02d}"
        data[column] = rm * dummy
        logger.debug(f"{column}: threshold={threshold:.6f}, {int(dummy.sum())} tail days")

    logger.info(f"Built BM10 regressors for {len(data):,} observations")
    return data


def resolve_terms(estimate: CoefficientEstimate,
                  terms: Optional[Dict[str, str]] = None,
                  pattern: Optional[str] = None) -> Dict[str, str]:
    """
    Map the four BM10 regressors to coefficient names in `estimate`.

    Args:
        estimate: Fitted coefficients
        terms: Explicit mapping {'rm': name, 'rm_D10': name, ...}
        pattern: Regex selecting the four names in regressor order,
            e.g. '^mxreg' for engines that number external regressors

    Returns:
        Mapping from BM10 regressor to coefficient name
    """
    names = list(estimate.params.index)

    if terms is not None:
        missing = [key for key in BM10_TERMS if key not in terms]
        if missing:
            raise StructuralError(f"Term mapping lacks: {', '.join(missing)}", missing)
        mapping = {key: terms[key] for key in BM10_TERMS}
    elif pattern is not None:
        matched = [name for name in names if re.search(pattern, name)]
        if len(matched) != len(BM10_TERMS):
            raise StructuralError(
                f"Pattern {pattern!r} matched {len(matched)} coefficients, "
                f"expected {len(BM10_TERMS)}: {matched}",
                BM10_TERMS
            )
        mapping = dict(zip(BM10_TERMS, matched))
    else:
        mapping = {key: key for key in BM10_TERMS}

    unknown = [name for name in mapping.values() if name not in names]
    if unknown:
        raise UnknownTermError(unknown)
    return mapping


def bm10_table(estimate: CoefficientEstimate,
               terms: Optional[Dict[str, str]] = None,
               pattern: Optional[str] = None) -> pd.DataFrame:
    """
    Cumulative hedge coefficients and p-values per tail level.

    c0 is the base coefficient; each tail level adds its interaction
    coefficient to all less extreme ones (0.10 = c0 + c1, 0.05 = c0 + c1 + c2,
    0.01 = c0 + c1 + c2 + c3).

    Returns:
        DataFrame with columns Hedge, Coefficient_Sum, p_value
    """
    try:
        mapping = resolve_terms(estimate, terms=terms, pattern=pattern)
        ordered = [mapping[key] for key in BM10_TERMS]

        rows = []
        for depth, level in enumerate(BM10_LEVELS, start=1):
            combo = linear_combination(estimate, ordered[:depth])
            rows.append({
                'Hedge': level,
                'Coefficient_Sum': combo.estimate,
                'p_value': combo.p_value
            })

        table = pd.DataFrame(rows, columns=['Hedge', 'Coefficient_Sum', 'p_value'])

        logger.info(
            "BM10 table:\n" + "\n".join(
                f"  {row.Hedge:>4}: {row.Coefficient_Sum:9.5f} (p={row.p_value:.4f})"
                for row in table.itertuples()
            )
        )
        return table

    except Exception as e:
        logger.error(f"Error assembling BM10 table: {str(e)}")
        raise
