from dataclasses import dataclass
import logging
import numpy as np
import pandas as pd
from typing import Optional

from exceptions import ValidationError

logger = logging.getLogger(__name__)

@dataclass(frozen=True, eq=False)
class CovariancePath:
    """Time-varying 2x2 conditional covariance matrices from a DCC/GARCH fit"""
    matrices: np.ndarray  # Shape: (T, 2, 2); asset 1 = hedged, asset 2 = hedging
    index: Optional[pd.Index] = None  # Dates of the observations, if known

    def __post_init__(self):
        matrices = np.asarray(self.matrices, dtype=float)
        if matrices.ndim != 3 or matrices.shape[1:] != (2, 2):
            raise ValidationError('covariance', f"must have shape (T, 2, 2), got {matrices.shape}")
        if self.index is not None and len(self.index) != matrices.shape[0]:
            raise ValidationError('index', f"must have length {matrices.shape[0]}")
        bad = ~np.isfinite(matrices).all(axis=(1, 2))
        if bad.any():
            raise ValidationError(
                'covariance',
                f"must be finite; {int(bad.sum())} of {len(bad)} matrices contain NaN or inf"
            )
        if not np.allclose(matrices[:, 0, 1], matrices[:, 1, 0]):
            logger.warning("Covariance matrices are not symmetric; using the [0, 1] element")
        object.__setattr__(self, 'matrices', matrices)

    def __len__(self) -> int:
        return self.matrices.shape[0]

    @property
    def v1(self) -> np.ndarray:
        return self.matrices[:, 0, 0]

    @property
    def v2(self) -> np.ndarray:
        return self.matrices[:, 1, 1]

    @property
    def c12(self) -> np.ndarray:
        return self.matrices[:, 0, 1]

    @classmethod
    def from_stacked(cls, array, time_axis: int = 0, index=None) -> 'CovariancePath':
        """From a stacked array with time on `time_axis`, e.g. (2, 2, T) with time_axis=-1"""
        matrices = np.moveaxis(np.asarray(array, dtype=float), time_axis, 0)
        return cls(matrices=matrices, index=index)

    @classmethod
    def from_components(cls, var1, var2, cov12, index=None) -> 'CovariancePath':
        """From the conditional variances and covariance series"""
        if index is None and isinstance(var1, pd.Series):
            index = var1.index
        v1 = np.asarray(var1, dtype=float)
        v2 = np.asarray(var2, dtype=float)
        c12 = np.asarray(cov12, dtype=float)
        if not len(v1) == len(v2) == len(c12):
            raise ValidationError('covariance', "components must have equal lengths")
        matrices = np.stack([
            np.stack([v1, c12], axis=-1),
            np.stack([c12, v2], axis=-1)
        ], axis=1)
        return cls(matrices=matrices, index=index)

    @classmethod
    def from_volatility_correlation(cls, vol1, vol2, corr, index=None) -> 'CovariancePath':
        """From conditional volatilities and the dynamic correlation series"""
        s1 = np.asarray(vol1, dtype=float)
        s2 = np.asarray(vol2, dtype=float)
        rho = np.asarray(corr, dtype=float)
        if index is None and isinstance(vol1, pd.Series):
            index = vol1.index
        return cls.from_components(s1 ** 2, s2 ** 2, rho * s1 * s2, index=index)
