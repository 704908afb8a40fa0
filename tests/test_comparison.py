"""
Tests for comparison.py module
"""
import pytest
import numpy as np
import pandas as pd
from scipy import stats

from harereport.comparison import (
    compare_means, descriptive_stats, effect_size, effect_size_band,
    percent_difference, pooled_sd, weight_sample,
)
from harereport.errors import DegenerateInputError, EmptySampleError, InsufficientDataError


class TestDescriptiveStats:
    """Test class for per-sex descriptive statistics"""

    @pytest.fixture
    def juveniles(self):
        return pd.DataFrame({
            'sex': ['Male', 'Male', 'Male', 'Female', 'Female', 'Unspecified', 'Male'],
            'weight': [1400.0, 1500.0, 1600.0, 1200.0, np.nan, 700.0, np.nan],
        })

    def test_descriptive_stats(self, juveniles):
        """Test mean, sample sd and count"""
        res = descriptive_stats(juveniles, 'Male')
        assert res.group == 'Male'
        assert res.mean == pytest.approx(1500.0)
        assert res.sd == pytest.approx(100.0)
        assert res.n == 3

    def test_single_observation_has_no_sd(self, juveniles):
        """Test sd is undefined for a single value"""
        res = descriptive_stats(juveniles, 'Female')
        assert res.n == 1
        assert res.sd is None

    def test_empty_sample(self, juveniles):
        """Test a group without weights raises instead of returning NaN"""
        juveniles.loc[juveniles['sex'] == 'Female', 'weight'] = np.nan
        with pytest.raises(EmptySampleError) as exc:
            descriptive_stats(juveniles, 'Female')
        assert exc.value.field == 'Female'

    def test_weight_sample(self, juveniles):
        """Test missing weights are dropped from the sample"""
        assert weight_sample(juveniles, 'Male').tolist() == [1400.0, 1500.0, 1600.0]


class TestComparison:
    """Test class for the two-sample comparison"""

    @pytest.fixture
    def male(self):
        return [1400.0, 1500.0, 1600.0]

    @pytest.fixture
    def female(self):
        return [1200.0, 1300.0, 1400.0]

    def test_compare_means(self, male, female):
        """Test Welch t-test on the worked example"""
        res = compare_means(male, female)
        assert res.mean_difference == pytest.approx(200.0)
        assert res.statistic == pytest.approx(200 / np.sqrt(2 * 100 ** 2 / 3))
        assert res.df == pytest.approx(4.0)
        assert 0 < res.p_value < 0.1

    def test_compare_means_matches_scipy_welch(self):
        """Test against scipy with unequal variances and sizes"""
        rng = np.random.default_rng(1)
        a = rng.normal(900, 200, 40)
        b = rng.normal(850, 120, 25)
        res = compare_means(a, b)
        expected = stats.ttest_ind(a, b, equal_var=False)
        assert res.statistic == pytest.approx(expected.statistic)
        assert res.p_value == pytest.approx(expected.pvalue)
        va, vb = a.var(ddof=1) / 40, b.var(ddof=1) / 25
        assert res.df == pytest.approx((va + vb) ** 2 / (va ** 2 / 39 + vb ** 2 / 24))
        assert res.df < 40 + 25 - 2

    def test_compare_means_drops_missing(self, male, female):
        """Test missing values are excluded before testing"""
        res = compare_means(male + [np.nan], female)
        assert res.mean_difference == pytest.approx(200.0)

    def test_compare_means_empty(self, male):
        """Test an empty sample"""
        with pytest.raises(EmptySampleError):
            compare_means(male, [])

    def test_compare_means_single_value(self, male):
        """Test a sample whose variance is undefined"""
        with pytest.raises(InsufficientDataError):
            compare_means(male, [1300.0])

    def test_compare_means_zero_variance(self):
        """Test two constant samples"""
        with pytest.raises(DegenerateInputError):
            compare_means([5.0, 5.0], [5.0, 5.0, 5.0])

    def test_pooled_sd(self, male, female):
        """Test the (n-1)-weighted pooled standard deviation"""
        assert pooled_sd(male, female) == pytest.approx(100.0)
        assert pooled_sd([1.0, 3.0], [10.0, 10.0, 10.0, 10.0]) == pytest.approx(np.sqrt(2 / 4))

    def test_effect_size(self, male, female):
        """Test Cohen's d on the worked example"""
        d = effect_size(male, female)
        assert d == pytest.approx(2.0)
        assert effect_size_band(d) == 'large'
        assert effect_size(female, male) == pytest.approx(-2.0)

    def test_effect_size_zero_pooled_sd(self):
        """Test constant samples have no standardized difference"""
        with pytest.raises(DegenerateInputError):
            effect_size([3.0, 3.0], [3.0, 3.0])

    @pytest.mark.parametrize('d, band', [
        (0.0, 'negligible'),
        (-0.19, 'negligible'),
        (0.2, 'small'),
        (-0.49, 'small'),
        (0.5, 'medium'),
        (0.79, 'medium'),
        (0.8, 'large'),
        (-1.5, 'large'),
    ])
    def test_effect_size_band(self, d, band):
        """Test the fixed |d| thresholds"""
        assert effect_size_band(d) == band

    def test_percent_difference(self):
        """Test the difference is relative to the average of both means"""
        assert percent_difference(1500.0, 1300.0) == pytest.approx(100 * 200 / 1400)
        assert percent_difference(1300.0, 1500.0) == pytest.approx(-100 * 200 / 1400)

    def test_percent_difference_zero_average(self):
        with pytest.raises(DegenerateInputError):
            percent_difference(1.0, -1.0)
