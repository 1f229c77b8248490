"""
Input validation and alignment for asset return series.
"""

import logging
import numbers
import pandas as pd
import numpy as np

from exceptions import ValidationError, InsufficientDataError

logger = logging.getLogger(__name__)

MIN_OBSERVATIONS = 10


class DataValidator:
    """Validates return series and scalar risk parameters."""

    def __init__(self, min_observations: int = MIN_OBSERVATIONS):
        self.min_observations = min_observations

        # Bounds for scalar parameters: (min, max, closed)
        self.validation_bounds = {
            'p': {'min': 0.0, 'max': 1.0, 'closed': False},
            'w': {'min': 0.0, 'max': 1.0, 'closed': True},
        }

    @staticmethod
    def _is_numeric(values) -> bool:
        """Check values are numbers (booleans and strings are not)"""
        if isinstance(values, (pd.Series, pd.Index)):
            return (pd.api.types.is_numeric_dtype(values)
                    and not pd.api.types.is_bool_dtype(values))

        arr = np.asarray(values)
        if arr.dtype == object:
            return all(
                v is None or (isinstance(v, numbers.Real) and not isinstance(v, (bool, np.bool_)))
                for v in arr.ravel()
            )
        return np.issubdtype(arr.dtype, np.number)

    def validate_returns(self, values, name: str = 'x') -> np.ndarray:
        """
        Validate a return series and drop missing or non-finite entries.

        Args:
            values: Sequence, array or Series of returns
            name: Parameter name used in error messages

        Returns:
            1-d float array of the finite observations
        """
        if not self._is_numeric(values):
            raise ValidationError(name, "must be a numeric vector.")

        arr = np.asarray(values, dtype=float).ravel()
        finite = arr[np.isfinite(arr)]

        dropped = len(arr) - len(finite)
        if dropped > 0:
            logger.debug(f"Excluded {dropped} missing/non-finite values from `{name}`")

        # Sample standard deviation needs two points
        if len(finite) < 2:
            raise ValidationError(name, "must contain at least 2 finite observations.")

        return finite

    def validate_scalar(self, value, name: str, kind: str = None) -> float:
        """Validate a scalar parameter against the bounds of `kind` (default: `name`)"""
        bounds = self.validation_bounds[kind or name]
        lo, hi = bounds['min'], bounds['max']
        interval = f"[{lo:g},{hi:g}]" if bounds['closed'] else f"({lo:g},{hi:g})"

        if isinstance(value, (bool, np.bool_)) or np.ndim(value) != 0:
            raise ValidationError(name, f"must be a scalar in {interval}.")
        if not np.issubdtype(np.asarray(value).dtype, np.number):
            raise ValidationError(name, f"must be a scalar in {interval}.")

        value = float(value)
        if bounds['closed']:
            inside = lo <= value <= hi
        else:
            inside = lo < value < hi
        if not inside:
            raise ValidationError(name, f"must be a scalar in {interval}.")
        return value

    def validate_probability(self, p, name: str = 'p') -> float:
        return self.validate_scalar(p, name, 'p')

    def validate_weight(self, w, name: str = 'w') -> float:
        return self.validate_scalar(w, name, 'w')

    def align_pair(self, hedged, hedge, min_observations: int = None) -> pd.DataFrame:
        """
        Align two return series and keep pairwise-complete rows.

        Series are joined on their index; plain arrays are aligned by position.

        Args:
            hedged: Returns of the asset being hedged
            hedge: Returns of the hedging asset
            min_observations: Minimum overlapping rows (default: instance setting)

        Returns:
            DataFrame with columns ['hedged', 'hedge']
        """
        if min_observations is None:
            min_observations = self.min_observations

        for values, name in ((hedged, 'hedged'), (hedge, 'hedge')):
            if not self._is_numeric(values):
                raise ValidationError(name, "must be a numeric vector.")

        if isinstance(hedged, pd.Series) and isinstance(hedge, pd.Series):
            data = pd.concat(
                [hedged.astype(float).rename('hedged'), hedge.astype(float).rename('hedge')],
                axis=1,
                join='outer'
            )
        else:
            x1 = np.asarray(hedged, dtype=float).ravel()
            x2 = np.asarray(hedge, dtype=float).ravel()
            n = min(len(x1), len(x2))
            if len(x1) != len(x2):
                logger.warning(f"Series lengths differ ({len(x1)} vs {len(x2)}); truncating to {n}")
            data = pd.DataFrame({'hedged': x1[:n], 'hedge': x2[:n]})

        clean = data.replace([np.inf, -np.inf], np.nan).dropna()
        dropped = len(data) - len(clean)
        if dropped > 0:
            logger.warning(f"Dropped {dropped} rows with missing values during alignment")

        if len(clean) < min_observations:
            raise InsufficientDataError(len(clean), min_observations)

        logger.info(f"Aligned {len(clean):,} overlapping observations")
        return clean
