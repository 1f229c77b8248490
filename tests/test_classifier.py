import pytest
import numpy as np
import pandas as pd

from exceptions import MissingLevelError, StructuralError
from models import Classification
from regression.classifier import BM10Classifier, classify_bm10

def make_table(c0, p0, s10, p10, s05, p05, s01, p01):
    """Build a BM10 table from the four (coefficient, p-value) pairs"""
    return pd.DataFrame({
        'Hedge': ['c0', '0.10', '0.05', '0.01'],
        'Coefficient_Sum': [c0, s10, s05, s01],
        'p_value': [p0, p10, p05, p01]
    })

@pytest.fixture
def classifier():
    return BM10Classifier()

def test_strong_hedge_strong_safe_haven(classifier):
    """Test all levels negative and significant"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    result = classifier.classify(table)
    assert isinstance(result, Classification)
    assert result.hedge_class == 'strong hedge'
    assert result.safehaven_class == 'strong safe haven'
    assert result.sentence == 'Selected asset is a strong hedge - strong safe haven .'

def test_weak_hedge_weak_safe_haven(classifier):
    """Test zero, insignificant coefficients"""
    table = make_table(0.0, 0.5, 1e-10, 0.6, -1e-10, 0.7, 0.0, 0.8)
    result = classifier.classify(table)
    assert result.hedge_class == 'weak hedge'
    assert result.safehaven_class == 'weak safe haven'

def test_weak_hedge_safe_haven_for_5(classifier):
    """Test the sentence format with a single significant tail level"""
    table = make_table(0.0, 0.01, 0.0, 0.5, -0.15, 0.03, -0.2, 0.2)
    assert str(classifier.classify(table)) == \
        'Selected asset is a weak hedge - safe haven for 5% .'

def test_safe_haven_for_10_takes_priority(classifier):
    """Test the 10% level wins when several tail levels qualify"""
    table = make_table(0.0, 0.01, -0.1, 0.01, -0.2, 0.01, 0.3, 0.5)
    result = classifier.classify(table)
    assert result.safehaven_class == 'safe haven for 10%'
    # Tail interactions push the coefficient above the base level
    assert result.hedge_class == 'not a hedge'

def test_safe_haven_for_1(classifier):
    """Test only the 1% level significantly negative"""
    table = make_table(0.0, 0.01, 0.0, 0.5, 0.0, 0.5, -0.3, 0.04)
    result = classifier.classify(table)
    assert result.hedge_class == 'weak hedge'
    assert result.safehaven_class == 'safe haven for 1%'

def test_not_a_hedge_not_a_safe_haven(classifier):
    """Test significantly positive coefficients"""
    table = make_table(0.3, 0.01, 0.3, 0.01, 0.4, 0.01, 0.5, 0.01)
    result = classifier.classify(table)
    assert result.hedge_class == 'not a hedge'
    assert result.safehaven_class == 'not a safe haven'

def test_strong_hedge_requires_joint_condition(classifier):
    """Test positive tail interactions disqualify a negative base coefficient"""
    table = make_table(-0.5, 0.01, -0.4, 0.01, -0.2, 0.01, 0.2, 0.01)
    assert classifier.classify(table).hedge_class == 'not a hedge'

def test_weak_safe_haven_uses_base_p_value(classifier):
    """Test an insignificant c0 makes every level count as insignificant"""
    table = make_table(-0.5, 0.5, -0.6, 0.001, -0.7, 0.001, -0.8, 0.001)
    result = classifier.classify(table)
    assert result.safehaven_class == 'weak safe haven'
    assert result.hedge_class == 'weak hedge'

def test_tolerance(classifier):
    """Test values within tol of zero count as zero"""
    table = make_table(-1e-9, 0.01, -1e-9, 0.01, -1e-9, 0.01, -1e-9, 0.01)
    result = classifier.classify(table)
    assert result.hedge_class == 'weak hedge'
    assert result.safehaven_class == 'weak safe haven'

    loose = BM10Classifier(tol=1e-12).classify(table)
    assert loose.hedge_class == 'strong hedge'
    assert loose.safehaven_class == 'strong safe haven'

def test_significance_threshold():
    """Test the significance level is configurable"""
    table = make_table(-0.5, 0.07, -0.6, 0.07, -0.7, 0.07, -0.8, 0.07)
    assert BM10Classifier().classify(table).hedge_class == 'strong hedge'
    strict = BM10Classifier(significance=0.05).classify(table)
    assert strict.hedge_class == 'weak hedge'
    assert strict.safehaven_class == 'weak safe haven'

def test_row_order_irrelevant(classifier):
    """Test rows are looked up by level, not position"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    shuffled = table.iloc[[3, 1, 0, 2]].reset_index(drop=True)
    assert classifier.classify(shuffled) == classifier.classify(table)

def test_missing_row(classifier):
    """Test a table without the 1% row fails naming it"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    table = table[table['Hedge'] != '0.01']
    with pytest.raises(MissingLevelError, match='0.01') as excinfo:
        classifier.classify(table)
    assert excinfo.value.missing == ['0.01']

def test_missing_value(classifier):
    """Test an NA p-value counts as a missing row"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, np.nan, -0.8, 0.01)
    with pytest.raises(MissingLevelError) as excinfo:
        classifier.classify(table)
    assert excinfo.value.missing == ['0.05']

def test_missing_column(classifier):
    """Test tables without the expected columns are rejected"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    with pytest.raises(StructuralError, match='p_value'):
        classifier.classify(table.drop(columns='p_value'))

def test_duplicate_level(classifier):
    """Test duplicated levels are rejected"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    table = pd.concat([table, table.iloc[[0]]], ignore_index=True)
    with pytest.raises(StructuralError, match='c0'):
        classifier.classify(table)

def test_classify_bm10_returns_sentence():
    """Test functional interface"""
    table = make_table(-0.5, 0.01, -0.6, 0.01, -0.7, 0.01, -0.8, 0.01)
    assert classify_bm10(table) == 'Selected asset is a strong hedge - strong safe haven .'
