import pytest
import numpy as np
import pandas as pd
import statsmodels.api as sm

from exceptions import InsufficientDataError
from garch.models import CovariancePath
from models import Classification, HedgeSummary
from workflows.run_hedge_analysis import (analyze_pair, classify_many, fit_bm10_garch,
                                         load_bm10_tables)

@pytest.fixture
def pair_returns():
    """Market returns and a hedge that rises in market crashes"""
    np.random.seed(7)
    n = 1000
    dates = pd.bdate_range('2016-01-01', periods=n)
    rm = np.random.normal(0.0003, 0.01, n)
    crash = (rm <= np.quantile(rm, 0.10)).astype(float)
    hedge = -0.3 * rm - 0.5 * rm * crash + np.random.normal(0, 0.005, n)
    return pd.Series(rm, index=dates), pd.Series(hedge, index=dates)

def fit_ols(regressors: pd.DataFrame):
    """Stand-in mean-equation fitter"""
    X = sm.add_constant(regressors[['rm', 'rm_D10', 'rm_D05', 'rm_D01']])
    return sm.OLS(regressors['y'], X).fit()

def fit_constant_covariance(aligned: pd.DataFrame):
    """Stand-in covariance fitter returning a (T, 2, 2) array"""
    cov = np.cov(aligned['hedged'], aligned['hedge'])
    return np.repeat(cov[np.newaxis, :, :], len(aligned), axis=0)

def test_cdb_only(pair_returns):
    """Test the pair analysis without external fitters"""
    hedged, hedge = pair_returns
    results = analyze_pair(hedged, hedge)
    assert set(results) == {'n_obs', 'cdb'}
    assert results['n_obs'] == len(hedged)
    assert list(results['cdb'].index) == ['w05', 'w10', 'w20']

def test_full_analysis(pair_returns):
    """Test BM10 classification and hedge summary from injected fitters"""
    hedged, hedge = pair_returns
    results = analyze_pair(
        hedged, hedge,
        fit_mean_equation=fit_ols,
        fit_covariance=fit_constant_covariance
    )

    table = results['bm10']
    assert list(table['Hedge']) == ['c0', '0.10', '0.05', '0.01']
    assert table.loc[0, 'Coefficient_Sum'] == pytest.approx(-0.3, abs=0.05)

    verdict = results['classification']
    assert isinstance(verdict, Classification)
    assert verdict.hedge_class == 'strong hedge'
    assert verdict.safehaven_class == 'strong safe haven'

    summary = results['hedge_summary']
    assert isinstance(summary, HedgeSummary)
    assert summary.beta_min == pytest.approx(summary.beta_max)
    cov = np.cov(hedged, hedge)
    assert summary.beta_mean == pytest.approx(cov[0, 1] / cov[1, 1])

def test_arch_reference_fitter(pair_returns):
    """Test the GARCH(1,1) mean-equation fitter feeds the classifier"""
    hedged, hedge = pair_returns
    results = analyze_pair(hedged, hedge, fit_mean_equation=fit_bm10_garch)

    table = results['bm10']
    assert table.loc[0, 'Coefficient_Sum'] == pytest.approx(-0.3, abs=0.05)
    assert table.loc[3, 'Coefficient_Sum'] < table.loc[0, 'Coefficient_Sum']
    assert results['classification'].hedge_class == 'strong hedge'

def test_covariance_path_passthrough(pair_returns):
    """Test a fitter may return a CovariancePath directly"""
    hedged, hedge = pair_returns
    path_fitter = lambda aligned: CovariancePath.from_stacked(fit_constant_covariance(aligned))
    results = analyze_pair(hedged, hedge, fit_covariance=path_fitter)
    assert 0 <= results['hedge_summary'].HE <= 1

def test_insufficient_overlap():
    """Test short samples fail before any fitting"""
    calls = []
    with pytest.raises(InsufficientDataError):
        analyze_pair(np.arange(8.0), np.arange(8.0), fit_mean_equation=calls.append)
    assert calls == []

def test_unsupported_fit_result(pair_returns):
    """Test fitters must return a supported result type"""
    hedged, hedge = pair_returns
    with pytest.raises(TypeError):
        analyze_pair(hedged, hedge, fit_mean_equation=lambda regressors: object())

def make_table(coefs, pvalues):
    return pd.DataFrame({
        'Hedge': ['c0', '0.10', '0.05', '0.01'],
        'Coefficient_Sum': coefs,
        'p_value': pvalues
    })

def test_classify_many():
    """Test batch classification keeps going past bad tables"""
    tables = {
        'GLD': make_table([-0.5, -0.6, -0.7, -0.8], [0.01] * 4),
        'BTC': make_table([0.0, 0.0, 0.0, 0.0], [0.5] * 4),
        'BAD': make_table([0.1, 0.1, 0.1, 0.1], [0.5] * 4).iloc[:3],
    }
    verdicts = classify_many(tables, show_progress=False)

    assert list(verdicts['asset']) == ['GLD', 'BTC', 'BAD']
    gld = verdicts.set_index('asset').loc['GLD']
    assert gld['verdict'] == 'Selected asset is a strong hedge - strong safe haven .'
    btc = verdicts.set_index('asset').loc['BTC']
    assert btc['hedge_class'] == 'weak hedge'
    assert btc['safehaven_class'] == 'weak safe haven'
    bad = verdicts.set_index('asset').loc['BAD']
    assert '0.01' in bad['error']
    assert verdicts['error'].isna().sum() == 2

def test_load_bm10_tables(tmp_path):
    """Test stacked CSV tables keep level labels as text"""
    csv_path = tmp_path / 'bm10.csv'
    rows = pd.concat([
        make_table([-0.5, -0.6, -0.7, -0.8], [0.01] * 4).assign(asset='GLD'),
        make_table([0.0, 0.0, 0.0, 0.0], [0.5] * 4).assign(asset='BTC'),
    ])
    rows.to_csv(csv_path, index=False)

    tables = load_bm10_tables(csv_path)
    assert list(tables) == ['GLD', 'BTC']
    assert list(tables['GLD']['Hedge']) == ['c0', '0.10', '0.05', '0.01']
    assert classify_many(tables, show_progress=False)['error'].isna().all()
