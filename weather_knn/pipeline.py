"""End-to-end pipeline: prepare, split, preprocess, fit, predict, evaluate."""
import logging

import pandas as pd

from weather_knn.constants import DEFAULT_CONFIG, TARGET_COL, PARSE_ERROR_POLICIES
from weather_knn.data_loader import prepare_dataset
from weather_knn.errors import InsufficientDataError
from weather_knn.knn import KNNRegressor
from weather_knn.ml_helpers import (
    split_dataset, WeatherPreprocessor, regression_metrics, predictions_frame,
)

logger = logging.getLogger(__name__)

VARIANTS = ("plain", "polynomial")


def make_config(**overrides):
    """Return DEFAULT_CONFIG updated with overrides, after validation."""
    unknown = sorted(set(overrides) - set(DEFAULT_CONFIG))
    if unknown:
        raise KeyError(f"unknown config option(s): {', '.join(unknown)}")
    config = {**DEFAULT_CONFIG, **overrides}

    if not 0 < config["train_fraction"] <= 1:
        raise ValueError("train_fraction must be in (0, 1]")
    if int(config["k"]) != config["k"] or config["k"] < 1:
        raise ValueError("k must be a positive integer")
    degree = config["polynomial_degree"]
    if degree is not None and (int(degree) != degree or degree < 2):
        raise ValueError("polynomial_degree must be an integer >= 2 or None")
    if config["imputation_strategy"] != "median":
        raise ValueError("only median imputation is supported")
    if config["on_parse_error"] not in PARSE_ERROR_POLICIES:
        raise ValueError(f"on_parse_error must be one of {PARSE_ERROR_POLICIES}")
    config["k"] = int(config["k"])
    return config


def fit_variant(split, config, polynomial=False):
    """Fit one preprocessing + kNN configuration on split.train and score it on split.test."""
    name = "polynomial" if polynomial else "plain"
    preprocessor = WeatherPreprocessor(
        polynomial_degree=config["polynomial_degree"] if polynomial else None,
        imputation_strategy=config["imputation_strategy"],
    )
    preprocessor.fit(split.train)
    X_train = preprocessor.transform(split.train)
    X_test = preprocessor.transform(split.test)

    model = KNNRegressor(n_neighbors=config["k"], weighted=config["weighted"])
    model.fit(X_train, split.train.frame[TARGET_COL])
    predicted = model.predict(X_test) if len(X_test) else []

    predictions = predictions_frame(split.test.frame, predicted)
    metrics = regression_metrics(predictions["actual"], predictions["predicted"])
    logger.info("%s model (k=%d, features=%s): rmse=%s mae=%s r2=%s", name, config["k"],
                preprocessor.feature_names_out_, metrics["rmse"], metrics["mae"], metrics["r2"])
    return {
        "name": name,
        "preprocessor": preprocessor,
        "model": model,
        "predictions": predictions,
        "metrics": metrics,
    }


def run_pipeline(raw, config=None):
    """Run every stage in order on a raw NOAA table and fit both model variants."""
    config = config or make_config()
    dataset = prepare_dataset(raw, on_parse_error=config["on_parse_error"])
    if dataset.empty:
        raise InsufficientDataError("no complete observations left after cleaning")
    split = split_dataset(dataset, config["seed"], config["train_fraction"])
    if len(split.train) < config["k"]:
        raise InsufficientDataError(
            f"only {len(split.train)} training row(s) for k={config['k']} neighbors"
        )

    variants = VARIANTS if config["polynomial_degree"] else VARIANTS[:1]
    results = [fit_variant(split, config, polynomial=v == "polynomial") for v in variants]
    return {"config": config, "dataset": dataset, "split": split, "results": results}


def metrics_table(results):
    """Summarize variant metrics as a DataFrame, one row per variant."""
    rows = []
    for result in results:
        metrics = result["metrics"]
        rows.append({
            "model": result["name"],
            "n_test": metrics["n"],
            "rmse": metrics["rmse"],
            "mae": metrics["mae"],
            "r2": metrics["r2"],
            "undefined": "; ".join(f"{k}: {v}" for k, v in metrics["undefined"].items()),
        })
    return pd.DataFrame(rows).set_index("model")
