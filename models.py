"""Common data models used across the project."""

from dataclasses import dataclass, field
import numpy as np
import pandas as pd
from typing import Dict

@dataclass(frozen=True)
class LinComboResult:
    """Sum of selected coefficients with its normal-theory inference"""
    estimate: float
    std_error: float
    z_stat: float
    p_value: float

@dataclass(frozen=True)
class CoefficientEstimate:
    """Coefficient vector and covariance matrix from an external fit"""
    params: pd.Series  # Indexed by coefficient name
    cov: pd.DataFrame  # Same ordering on both axes

    def __post_init__(self):
        if not self.params.index.equals(self.cov.index) or \
                not self.params.index.equals(self.cov.columns):
            raise ValueError("Covariance matrix is not aligned with coefficient names")

    @classmethod
    def from_arrays(cls, names, values, cov) -> 'CoefficientEstimate':
        """Build from plain sequences (names, values, k x k matrix)"""
        names = list(names)
        params = pd.Series(np.asarray(values, dtype=float), index=names)
        cov = pd.DataFrame(np.asarray(cov, dtype=float), index=names, columns=names)
        return cls(params=params, cov=cov)

@dataclass(frozen=True)
class HedgeSummary:
    """Hedge ratio summary, hedging effectiveness and optimal weight"""
    beta_mean: float
    beta_min: float
    beta_max: float
    HE: float
    OPW: float  # Mean weight of the hedging asset

    def to_dict(self) -> Dict[str, float]:
        return {
            'beta_mean': self.beta_mean,
            'beta_min': self.beta_min,
            'beta_max': self.beta_max,
            'HE': self.HE,
            'OPW': self.OPW
        }

@dataclass(frozen=True)
class Classification:
    """Hedge and safe-haven verdict for one asset"""
    hedge_class: str  # strong hedge / weak hedge / not a hedge
    safehaven_class: str
    details: Dict[str, float] = field(default_factory=dict, compare=False)

    @property
    def sentence(self) -> str:
        return f"Selected asset is a {self.hedge_class} - {self.safehaven_class} ."

    def __str__(self) -> str:
        return self.sentence
