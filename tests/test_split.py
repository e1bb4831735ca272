import math

import pandas as pd
import pytest

from weather_knn.ml_helpers import split_dataset, TrainingSet, HoldoutSet


def test_split_is_reproducible(dataset):
    first = split_dataset(dataset, seed=1234)
    second = split_dataset(dataset, seed=1234)
    pd.testing.assert_frame_equal(first.train.frame, second.train.frame)
    pd.testing.assert_frame_equal(first.test.frame, second.test.frame)


def test_split_partitions_dataset(dataset):
    split = split_dataset(dataset, seed=1234)
    train_idx = set(split.train.frame.index)
    test_idx = set(split.test.frame.index)
    assert train_idx.isdisjoint(test_idx)
    assert train_idx | test_idx == set(dataset.index)


@pytest.mark.parametrize("n", [1, 4, 5, 10, 39])
def test_train_gets_ceiling(n, dataset):
    split = split_dataset(dataset.head(n), seed=7)
    assert len(split.train) == math.ceil(0.75 * n)
    assert len(split.train) + len(split.test) == n


def test_split_types(dataset):
    split = split_dataset(dataset, seed=1)
    assert isinstance(split.train, TrainingSet)
    assert isinstance(split.test, HoldoutSet)


def test_split_keeps_row_order(dataset):
    split = split_dataset(dataset, seed=99)
    assert split.train.frame.index.is_monotonic_increasing
    assert split.test.frame.index.is_monotonic_increasing


def test_seed_controls_assignment(dataset):
    a = split_dataset(dataset, seed=1)
    b = split_dataset(dataset, seed=2)
    assert set(a.test.frame.index) != set(b.test.frame.index)


def test_custom_train_fraction(dataset):
    split = split_dataset(dataset, seed=1, train_fraction=0.5)
    assert len(split.train) == math.ceil(0.5 * len(dataset))


@pytest.mark.parametrize("fraction", [0, -0.1, 1.5])
def test_invalid_train_fraction(dataset, fraction):
    with pytest.raises(ValueError):
        split_dataset(dataset, seed=1, train_fraction=fraction)


def test_empty_dataset(dataset):
    with pytest.raises(ValueError):
        split_dataset(dataset.iloc[0:0], seed=1)
