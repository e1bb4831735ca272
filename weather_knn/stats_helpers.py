"""Descriptive statistics and correlation helpers for prepared datasets."""
import numpy as np
import pandas as pd

from weather_knn.constants import NUMERIC_COLS, TARGET_COL, TIMESTAMP_COL


def descriptive_stats(series):
    """Compute descriptive statistics for a numeric series."""
    return {
        "count": len(series),
        "mean": series.mean(),
        "median": series.median(),
        "std": series.std(),
        "min": series.min(),
        "max": series.max(),
        "q25": series.quantile(0.25),
        "q75": series.quantile(0.75),
        "iqr": series.quantile(0.75) - series.quantile(0.25),
        "skewness": series.skew(),
        "kurtosis": series.kurtosis(),
    }


def summary_table(dataset, columns=None):
    """One row of descriptive statistics per numeric column."""
    columns = columns or [c for c in NUMERIC_COLS if c in dataset.columns]
    return pd.DataFrame({col: descriptive_stats(dataset[col]) for col in columns}).T


def correlation_matrix(df, method="pearson"):
    """Compute correlation matrix for numeric columns."""
    numeric = df.select_dtypes(include=[np.number])
    return numeric.corr(method=method)


def target_correlations(df, target=TARGET_COL, method="pearson"):
    """Correlation of every other numeric column with the target, strongest first."""
    corr = correlation_matrix(df, method=method)[target].drop(target)
    return corr.reindex(corr.abs().sort_values(ascending=False).index)


def hourly_humidity_grid(dataset, bins=(0, 20, 40, 60, 80, 100)):
    """Mean precipitation for each relative-humidity band (rows) and hour of day (columns)."""
    bands = pd.cut(dataset["relative_humidity"], bins=list(bins), include_lowest=True)
    hours = dataset[TIMESTAMP_COL].dt.hour.rename("hour")
    grid = dataset[TARGET_COL].groupby([bands, hours], observed=False).mean().unstack("hour")
    grid.index = grid.index.astype(str)
    return grid
