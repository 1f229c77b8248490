"""
Hedge and safe-haven classification (Baur & McDermott, 2010).

Rules are evaluated in order and the first matching label wins.
"""

import logging
import pandas as pd
from typing import Callable, Dict, List, Tuple

from exceptions import MissingLevelError, StructuralError
from models import Classification
from .bm10 import BM10_LEVELS

logger = logging.getLogger(__name__)

DEFAULT_TOL = 1e-8
DEFAULT_SIGNIFICANCE = 0.10

Rule = Tuple[Callable[[Dict[str, float]], bool], str]


class BM10Classifier:
    """Turns a BM10 table into a hedge / safe-haven verdict"""

    def __init__(self, tol: float = DEFAULT_TOL,
                 significance: float = DEFAULT_SIGNIFICANCE):
        """
        Args:
            tol: Values within tol of zero count as zero
            significance: p-values below this are significant
        """
        self.tol = tol
        self.significance = significance
        self.hedge_rules = self._hedge_rules()
        self.safehaven_rules = self._safehaven_rules()

    def _negative(self, coef: float, p: float) -> bool:
        """Significantly negative"""
        return coef < -self.tol and p < self.significance

    def _null(self, coef: float, p: float) -> bool:
        """Zero or insignificant"""
        return abs(coef) <= self.tol or p >= self.significance

    def _joint_ok(self, v: Dict[str, float]) -> bool:
        # Tail interactions must not push the cumulative coefficient above the base level
        c123 = v['sum01'] - v['c0']
        return c123 <= max(v['c0'], 0) + self.tol

    def _hedge_rules(self) -> List[Rule]:
        return [
            (lambda v: self._negative(v['c0'], v['p0']) and self._joint_ok(v), 'strong hedge'),
            (lambda v: self._null(v['c0'], v['p0']) and self._joint_ok(v), 'weak hedge'),
        ]

    def _safehaven_rules(self) -> List[Rule]:
        # The weak branch tests every level against the c0 p-value
        return [
            (lambda v: all(self._null(v[key], v['p0'])
                           for key in ('c0', 'sum10', 'sum05', 'sum01')),
             'weak safe haven'),
            (lambda v: (self._negative(v['sum10'], v['p10'])
                        and self._negative(v['sum05'], v['p05'])
                        and self._negative(v['sum01'], v['p01'])
                        and self._negative(v['c0'], v['p0'])),
             'strong safe haven'),
            (lambda v: self._negative(v['sum10'], v['p10']), 'safe haven for 10%'),
            (lambda v: self._negative(v['sum05'], v['p05']), 'safe haven for 5%'),
            (lambda v: self._negative(v['sum01'], v['p01']), 'safe haven for 1%'),
        ]

    @staticmethod
    def _first_match(rules: List[Rule], values: Dict[str, float], default: str) -> str:
        for predicate, label in rules:
            if predicate(values):
                return label
        return default

    @staticmethod
    def extract_values(table: pd.DataFrame) -> Dict[str, float]:
        """
        Read the four (coefficient, p-value) pairs from a BM10 table.

        Raises MissingLevelError naming any level that is absent or NA.
        """
        required = {'Hedge', 'Coefficient_Sum', 'p_value'}
        missing_cols = sorted(required - set(table.columns))
        if missing_cols:
            raise StructuralError(f"Missing required columns: {missing_cols}", missing_cols)

        levels = table['Hedge'].astype(str)
        duplicated = sorted(set(levels[levels.duplicated()]) & set(BM10_LEVELS))
        if duplicated:
            raise StructuralError(f"Duplicate rows for levels: {', '.join(duplicated)}", duplicated)

        indexed = table.assign(Hedge=levels)[levels.isin(BM10_LEVELS)].set_index('Hedge')
        missing = []
        values = {}
        keys = {'c0': ('c0', 'p0'), '0.10': ('sum10', 'p10'),
                '0.05': ('sum05', 'p05'), '0.01': ('sum01', 'p01')}
        for level in BM10_LEVELS:
            if level not in indexed.index:
                missing.append(level)
                continue
            coef = pd.to_numeric(indexed.at[level, 'Coefficient_Sum'], errors='coerce')
            p = pd.to_numeric(indexed.at[level, 'p_value'], errors='coerce')
            if pd.isna(coef) or pd.isna(p):
                missing.append(level)
                continue
            coef_key, p_key = keys[level]
            values[coef_key] = float(coef)
            values[p_key] = float(p)

        if missing:
            raise MissingLevelError(missing)
        return values

    def classify(self, table: pd.DataFrame) -> Classification:
        """Classify hedge and safe-haven behavior from a BM10 table"""
        values = self.extract_values(table)

        hedge_class = self._first_match(self.hedge_rules, values, 'not a hedge')
        safehaven_class = self._first_match(self.safehaven_rules, values, 'not a safe haven')

        logger.info(
            f"Classified: {hedge_class} / {safehaven_class} "
            f"(c0={values['c0']:.4f}, p0={values['p0']:.4f})"
        )
        return Classification(
            hedge_class=hedge_class,
            safehaven_class=safehaven_class,
            details=values
        )


def classify_bm10(table: pd.DataFrame, tol: float = DEFAULT_TOL,
                  significance: float = DEFAULT_SIGNIFICANCE) -> str:
    """Verdict sentence, e.g. 'Selected asset is a weak hedge - safe haven for 5% .'"""
    return BM10Classifier(tol=tol, significance=significance).classify(table).sentence
