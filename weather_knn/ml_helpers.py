"""Train/test splitting, feature preprocessing and regression metrics."""
import logging
from collections import namedtuple

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin
from sklearn.metrics import mean_squared_error, mean_absolute_error, r2_score
from sklearn.utils.validation import check_is_fitted

from weather_knn.constants import FEATURE_COLS, TARGET_COL, TIMESTAMP_COL
from weather_knn.errors import SchemaError, DegenerateMetricError

logger = logging.getLogger(__name__)


class _Subset:
    """A read-only view of some dataset rows."""

    def __init__(self, frame):
        self.frame = frame

    def __len__(self):
        return len(self.frame)

    def __repr__(self):
        return f"{type(self).__name__}(rows={len(self.frame)})"


class TrainingSet(_Subset):
    """Rows that preprocessors and models may be fitted on."""


class HoldoutSet(_Subset):
    """Rows reserved for evaluation; never used for fitting."""


Split = namedtuple("Split", ["train", "test"])


def split_dataset(dataset, seed, train_fraction=0.75):
    """Randomly partition a dataset into train and test subsets.

    Train receives ceil(train_fraction * N) rows. The assignment depends only on
    the seed, and both subsets keep the dataset's row order and index.
    """
    if not 0 < train_fraction <= 1:
        raise ValueError(f"train_fraction must be in (0, 1], got {train_fraction!r}")
    n = len(dataset)
    if n == 0:
        raise ValueError("cannot split an empty dataset")

    n_train = int(np.ceil(round(train_fraction * n, 9)))
    order = np.random.RandomState(seed).permutation(n)
    train_pos = np.sort(order[:n_train])
    test_pos = np.sort(order[n_train:])

    split = Split(
        train=TrainingSet(dataset.iloc[train_pos].copy()),
        test=HoldoutSet(dataset.iloc[test_pos].copy()),
    )
    logger.info("Split %d rows into %d train / %d test (seed=%s)",
                n, len(split.train), len(split.test), seed)
    return split


class WeatherPreprocessor(BaseEstimator, TransformerMixin):
    """Median imputation, standardization and optional polynomial expansion.

    Statistics are learned from a TrainingSet only; transform() applies the
    stored statistics to any subset without refitting.
    """

    def __init__(self, features=None, polynomial_degree=None, imputation_strategy="median"):
        self.features = features
        self.polynomial_degree = polynomial_degree
        self.imputation_strategy = imputation_strategy

    def fit(self, train, y=None):
        if not isinstance(train, TrainingSet):
            raise TypeError(
                f"preprocessor can only be fitted on a TrainingSet, got {type(train).__name__}"
            )
        if self.imputation_strategy != "median":
            raise ValueError(f"unsupported imputation strategy {self.imputation_strategy!r}")
        degree = self.polynomial_degree
        if degree is not None and (int(degree) != degree or degree < 1):
            raise ValueError(f"polynomial_degree must be a positive integer, got {degree!r}")

        features = list(self.features or FEATURE_COLS)
        missing = [f for f in features if f not in train.frame.columns]
        if missing:
            raise SchemaError(missing)

        X = train.frame[features].astype(float)
        medians = X.median()
        if medians.isna().any():
            empty = medians[medians.isna()].index.tolist()
            raise ValueError(f"no observed training values for {empty}")

        scales = X.std(ddof=1)
        self.features_ = features
        self.medians_ = medians
        self.means_ = X.mean()
        # constant or single-row columns are centered but not scaled
        self.scales_ = scales.where(scales > 0, 1.0)
        self.powers_ = tuple(range(1, int(degree) + 1)) if degree else (1,)
        self.feature_names_out_ = self._output_names()
        return self

    def _output_names(self):
        if self.powers_ == (1,):
            return list(self.features_)
        return [f"{f}_poly_{p}" for f in self.features_ for p in self.powers_]

    def transform(self, data):
        check_is_fitted(self, "medians_")
        frame = data.frame if isinstance(data, _Subset) else data
        missing = [f for f in self.features_ if f not in frame.columns]
        if missing:
            raise SchemaError(missing)

        X = frame[self.features_].astype(float).fillna(self.medians_)
        Z = (X - self.means_) / self.scales_
        if self.powers_ == (1,):
            return Z

        expanded = {}
        for feature in self.features_:
            for power in self.powers_:
                expanded[f"{feature}_poly_{power}"] = Z[feature] ** power
        return pd.DataFrame(expanded, index=frame.index)

    def get_feature_names_out(self, input_features=None):
        check_is_fitted(self, "feature_names_out_")
        return np.asarray(self.feature_names_out_, dtype=object)


def r_squared(y_true, y_pred):
    """Coefficient of determination; raises DegenerateMetricError when undefined."""
    y_true = np.asarray(y_true, dtype=float).ravel()
    if len(y_true) < 2:
        raise DegenerateMetricError("r2", "fewer than 2 samples")
    if np.all(y_true == y_true[0]):
        raise DegenerateMetricError("r2", "actual values are constant")
    return float(r2_score(y_true, y_pred))


def regression_metrics(y_true, y_pred):
    """Compute regression metrics.

    Metrics that cannot be computed are returned as None and listed in
    result["undefined"] with the reason.
    """
    y_true = np.asarray(y_true, dtype=float).ravel()
    y_pred = np.asarray(y_pred, dtype=float).ravel()
    if len(y_true) != len(y_pred):
        raise ValueError(f"length mismatch: {len(y_true)} actual vs {len(y_pred)} predicted")

    result = {"n": len(y_true), "mse": None, "rmse": None, "mae": None, "r2": None, "undefined": {}}
    if len(y_true) < 2:
        for metric in ("mse", "rmse", "mae", "r2"):
            result["undefined"][metric] = "fewer than 2 samples"
        logger.warning("Metrics undefined: only %d test sample(s)", len(y_true))
        return result

    mse = mean_squared_error(y_true, y_pred)
    result["mse"] = float(mse)
    result["rmse"] = float(np.sqrt(mse))
    result["mae"] = float(mean_absolute_error(y_true, y_pred))
    try:
        result["r2"] = r_squared(y_true, y_pred)
    except DegenerateMetricError as exc:
        result["undefined"][exc.metric] = exc.reason
        logger.warning("%s", exc)
    return result


def predictions_frame(test_frame, predicted):
    """Pair predictions with the actual target of each test row."""
    actual = test_frame[TARGET_COL].to_numpy(dtype=float)
    predicted = np.asarray(predicted, dtype=float)
    result = pd.DataFrame({
        "actual": actual,
        "predicted": predicted,
        "residual": actual - predicted,
    }, index=test_frame.index)
    if TIMESTAMP_COL in test_frame.columns:
        result.insert(0, TIMESTAMP_COL, test_frame[TIMESTAMP_COL].to_numpy())
    return result
