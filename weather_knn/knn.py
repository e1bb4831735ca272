"""Distance-weighted k-nearest-neighbors regression."""
import numpy as np
from scipy.spatial.distance import cdist
from sklearn.base import BaseEstimator, RegressorMixin
from sklearn.utils.validation import check_is_fitted


class KNNRegressor(BaseEstimator, RegressorMixin):
    """k-nearest-neighbors regressor over Euclidean distance.

    Neighbors at equal distance are taken in training order. With weighted=True
    each neighbor's target is weighted by 1 / (distance + eps); when every
    selected neighbor coincides with the query the plain mean is used.
    """

    def __init__(self, n_neighbors=3, weighted=True, eps=1e-8):
        self.n_neighbors = n_neighbors
        self.weighted = weighted
        self.eps = eps

    def fit(self, X, y):
        X = np.asarray(X, dtype=float)
        y = np.asarray(y, dtype=float).ravel()
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        if len(X) != len(y):
            raise ValueError(f"X has {len(X)} rows but y has {len(y)} values")
        if len(X) == 0:
            raise ValueError("cannot fit on an empty training set")
        if self.n_neighbors < 1 or self.n_neighbors > len(X):
            raise ValueError(
                f"n_neighbors must be between 1 and {len(X)}, got {self.n_neighbors}"
            )
        if not (np.isfinite(X).all() and np.isfinite(y).all()):
            raise ValueError("training data contains non-finite values")

        self.X_ = X
        self.y_ = y
        self.n_features_in_ = X.shape[1]
        return self

    def _check_query(self, X):
        check_is_fitted(self, "X_")
        X = np.asarray(X, dtype=float)
        if X.ndim == 1:
            X = X.reshape(-1, 1) if self.n_features_in_ == 1 else X.reshape(1, -1)
        if X.shape[1] != self.n_features_in_:
            raise ValueError(
                f"query has {X.shape[1]} features, model was fitted on {self.n_features_in_}"
            )
        return X

    def kneighbors(self, X):
        """Return (distances, indices) of the k nearest training rows per query."""
        X = self._check_query(X)
        dist = cdist(X, self.X_, metric="euclidean")
        idx = np.argsort(dist, axis=1, kind="stable")[:, :self.n_neighbors]
        return np.take_along_axis(dist, idx, axis=1), idx

    def predict(self, X):
        dist, idx = self.kneighbors(X)
        targets = self.y_[idx]
        if not self.weighted:
            return targets.mean(axis=1)

        weights = 1.0 / (dist + self.eps)
        pred = (weights * targets).sum(axis=1) / weights.sum(axis=1)
        exact = (dist == 0).all(axis=1)
        pred[exact] = targets[exact].mean(axis=1)
        return pred
