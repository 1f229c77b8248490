"""Hedge analysis workflow for asset pairs and batches of BM10 tables"""

import logging
from pathlib import Path
import sys
import numpy as np
import pandas as pd
from typing import Callable, Dict, Optional
from arch import arch_model
from arch.univariate.base import ARCHModelResult

# Add parent directory to path
sys.path.append(str(Path(__file__).parent.parent))

from data_manager.data_validator import DataValidator, MIN_OBSERVATIONS
from diversification.cdb import CDBCalculator
from garch.effectiveness import HedgeEffectivenessAnalyzer
from garch.models import CovariancePath
from models import CoefficientEstimate
from regression.adapters import from_arch_result, from_statsmodels_result
from regression.bm10 import build_bm10_regressors, bm10_table
from regression.classifier import BM10Classifier, DEFAULT_TOL, DEFAULT_SIGNIFICANCE
from utils.progress import ProgressMonitor

logger = logging.getLogger('hedge_analysis')


def _as_estimate(fitted) -> CoefficientEstimate:
    """Accept a CoefficientEstimate or a fitted arch/statsmodels result"""
    if isinstance(fitted, CoefficientEstimate):
        return fitted
    if isinstance(fitted, ARCHModelResult) or hasattr(fitted, 'param_cov'):
        return from_arch_result(fitted)
    if hasattr(fitted, 'cov_params'):
        return from_statsmodels_result(fitted)
    raise TypeError(f"Cannot read coefficients from {type(fitted).__name__}")


def fit_bm10_garch(regressors: pd.DataFrame, dist: str = 'normal'):
    """
    Reference mean-equation fitter: least squares mean with the BM10
    regressors and a GARCH(1,1) variance.

    Returns are scaled to percent on both sides so slope coefficients keep
    their units.
    """
    scaled = regressors * 100
    model = arch_model(
        scaled['y'],
        x=scaled[['rm', 'rm_D10', 'rm_D05', 'rm_D01']],
        mean='LS',
        vol='GARCH',
        p=1,
        q=1,
        dist=dist,
        rescale=False
    )
    result = model.fit(disp='off', show_warning=False, options={'maxiter': 1000})
    logger.info(f"GARCH mean equation fitted: loglik={result.loglikelihood:.2f}")
    return result


def _as_path(fitted) -> CovariancePath:
    """Accept a CovariancePath or a (T, 2, 2) array"""
    if isinstance(fitted, CovariancePath):
        return fitted
    return CovariancePath.from_stacked(np.asarray(fitted, dtype=float))


def analyze_pair(
    hedged,
    hedge,
    fit_mean_equation: Optional[Callable[[pd.DataFrame], object]] = None,
    fit_covariance: Optional[Callable[[pd.DataFrame], object]] = None,
    p: float = 0.05,
    tol: float = DEFAULT_TOL,
    significance: float = DEFAULT_SIGNIFICANCE,
    term_pattern: Optional[str] = None,
    min_observations: int = MIN_OBSERVATIONS
) -> dict:
    """
    Run the hedge analysis for one (hedged, hedging) asset pair

    Steps:
    1. Align the two return series and drop incomplete rows
    2. CDB over the weight grid, with the grid weight on the hedging asset
    3. BM10 table and classification, if a mean-equation fitter is given
    4. Hedge ratio summary, if a covariance-path fitter is given

    Args:
        hedged: Returns of the asset being hedged
        hedge: Returns of the hedging asset
        fit_mean_equation: Fits the BM10 mean equation on the regressor
            frame (y, rm, rm_D10, rm_D05, rm_D01) and returns a
            CoefficientEstimate or a fitted arch/statsmodels result
        fit_covariance: Fits a bivariate DCC model on the aligned frame
            (hedged, hedge) and returns a CovariancePath or (T, 2, 2) array
        p: Tail probability for the CDB
        term_pattern: Regex locating the four BM10 coefficients, if the
            fitter renames the regressors
    """
    try:
        validator = DataValidator(min_observations=min_observations)
        aligned = validator.align_pair(hedged, hedge)
        results = {'n_obs': len(aligned)}

        logger.info(f"Computing CDB grid at p={p}")
        results['cdb'] = CDBCalculator(validator).calculate_grid(
            aligned['hedge'], aligned['hedged'], p
        )

        if fit_mean_equation is not None:
            regressors = build_bm10_regressors(aligned['hedged'], aligned['hedge'], validator=validator)
            estimate = _as_estimate(fit_mean_equation(regressors))
            table = bm10_table(estimate, pattern=term_pattern)
            classification = BM10Classifier(tol=tol, significance=significance).classify(table)
            results['bm10'] = table
            results['classification'] = classification
            logger.info(classification.sentence)

        if fit_covariance is not None:
            path = _as_path(fit_covariance(aligned))
            analyzer = HedgeEffectivenessAnalyzer(min_observations=min_observations)
            results['hedge_summary'] = analyzer.summarize(path)

        return results

    except Exception as e:
        logger.error(f"Error in hedge analysis: {str(e)}")
        raise


def classify_many(
    tables: Dict[str, pd.DataFrame],
    tol: float = DEFAULT_TOL,
    significance: float = DEFAULT_SIGNIFICANCE,
    show_progress: bool = True
) -> pd.DataFrame:
    """
    Classify a batch of BM10 tables keyed by asset name

    Tables that fail classification are reported in the `error` column
    instead of stopping the batch.
    """
    classifier = BM10Classifier(tol=tol, significance=significance)
    monitor = ProgressMonitor(total=len(tables), desc="Classifying assets",
                              logger=logger, disable=not show_progress)
    rows = []

    try:
        for asset, table in tables.items():
            try:
                verdict = classifier.classify(table)
                rows.append({
                    'asset': asset,
                    'hedge_class': verdict.hedge_class,
                    'safehaven_class': verdict.safehaven_class,
                    'verdict': verdict.sentence,
                    'error': None
                })
                monitor.update(status=f"{asset}: {verdict.sentence}")
            except ValueError as e:
                logger.warning(f"Skipping {asset}: {str(e)}")
                rows.append({
                    'asset': asset,
                    'hedge_class': None,
                    'safehaven_class': None,
                    'verdict': None,
                    'error': str(e)
                })
                monitor.update(failed=True)
    finally:
        monitor.close()

    return pd.DataFrame(
        rows, columns=['asset', 'hedge_class', 'safehaven_class', 'verdict', 'error']
    )


def load_bm10_tables(csv_path: Path) -> Dict[str, pd.DataFrame]:
    """Read stacked BM10 tables (asset, Hedge, Coefficient_Sum, p_value) from CSV"""
    data = pd.read_csv(csv_path, dtype={'asset': str, 'Hedge': str})
    return {
        asset: group.drop(columns='asset').reset_index(drop=True)
        for asset, group in data.groupby('asset', sort=False)
    }


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if len(sys.argv) != 2:
        logger.error("Usage: python workflows/run_hedge_analysis.py <bm10_tables.csv>")
        sys.exit(1)

    verdicts = classify_many(load_bm10_tables(Path(sys.argv[1])))
    print(verdicts.to_string(index=False))
