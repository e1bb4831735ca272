import numpy as np
import pandas as pd
import pytest
from sklearn.exceptions import NotFittedError

from weather_knn.constants import FEATURE_COLS
from weather_knn.errors import SchemaError
from weather_knn.ml_helpers import (
    split_dataset, WeatherPreprocessor, TrainingSet, HoldoutSet,
)


@pytest.fixture
def split(dataset):
    return split_dataset(dataset, seed=1234)


def test_train_is_standardized(split):
    pre = WeatherPreprocessor().fit(split.train)
    Z = pre.transform(split.train)
    assert list(Z.columns) == FEATURE_COLS
    assert np.allclose(Z.mean(), 0.0, atol=1e-9)
    assert np.allclose(Z.std(), 1.0)


def test_test_uses_train_statistics(split):
    pre = WeatherPreprocessor().fit(split.train)
    Z = pre.transform(split.test)
    expected = (split.test.frame[FEATURE_COLS] - split.train.frame[FEATURE_COLS].mean()) \
        / split.train.frame[FEATURE_COLS].std()
    pd.testing.assert_frame_equal(Z, expected)
    assert not np.allclose(Z.mean(), 0.0)


def test_transform_does_not_refit(split):
    pre = WeatherPreprocessor().fit(split.train)
    means = pre.means_.copy()
    first = pre.transform(split.test)
    pre.transform(split.train)
    pd.testing.assert_series_equal(pre.means_, means)
    pd.testing.assert_frame_equal(pre.transform(split.test), first)


@pytest.mark.parametrize("make_bad", [
    lambda s: s.test,
    lambda s: s.train.frame,
    lambda s: HoldoutSet(s.train.frame),
])
def test_fit_requires_training_set(split, make_bad):
    with pytest.raises(TypeError):
        WeatherPreprocessor().fit(make_bad(split))


def test_polynomial_expansion(split):
    pre = WeatherPreprocessor(polynomial_degree=2).fit(split.train)
    Z = pre.transform(split.test)
    assert list(Z.columns) == [
        "relative_humidity_poly_1", "relative_humidity_poly_2",
        "dry_bulb_temp_f_poly_1", "dry_bulb_temp_f_poly_2",
    ]
    assert list(pre.get_feature_names_out()) == list(Z.columns)
    plain = WeatherPreprocessor().fit(split.train).transform(split.test)
    for feature in FEATURE_COLS:
        np.testing.assert_allclose(Z[f"{feature}_poly_1"], plain[feature])
        np.testing.assert_allclose(Z[f"{feature}_poly_2"], plain[feature] ** 2)


def test_median_imputation():
    train = TrainingSet(pd.DataFrame({
        "relative_humidity": [10.0, np.nan, 30.0, 50.0],
        "dry_bulb_temp_f": [60.0, 61.0, 62.0, 63.0],
    }))
    pre = WeatherPreprocessor().fit(train)
    assert pre.medians_["relative_humidity"] == 30.0
    assert pre.scales_["relative_humidity"] == pytest.approx(20.0)

    query = pd.DataFrame({"relative_humidity": [np.nan], "dry_bulb_temp_f": [61.5]})
    Z = pre.transform(query)
    assert Z.loc[0, "relative_humidity"] == pytest.approx(0.0)
    assert Z.notna().all().all()


def test_constant_feature_is_centered():
    train = TrainingSet(pd.DataFrame({
        "relative_humidity": [40.0, 40.0, 40.0],
        "dry_bulb_temp_f": [50.0, 55.0, 60.0],
    }))
    pre = WeatherPreprocessor().fit(train)
    Z = pre.transform(train)
    assert (Z["relative_humidity"] == 0.0).all()


def test_transform_before_fit(split):
    with pytest.raises(NotFittedError):
        WeatherPreprocessor().transform(split.test)


def test_missing_feature_column(split):
    with pytest.raises(SchemaError):
        WeatherPreprocessor(features=["dew_point"]).fit(split.train)


@pytest.mark.parametrize("kwargs", [
    {"imputation_strategy": "mean"},
    {"polynomial_degree": 0},
    {"polynomial_degree": 1.5},
])
def test_invalid_parameters(split, kwargs):
    with pytest.raises(ValueError):
        WeatherPreprocessor(**kwargs).fit(split.train)
