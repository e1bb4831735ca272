import numpy as np
import pandas as pd
import pytest

from weather_knn.data_loader import prepare_dataset

PRECIP_TEXT = ["0.00", "T", "0.05s", None, "0.12", "Ts", "0.00", "0.30", "", "0.01"]


@pytest.fixture
def raw_frame():
    """A small NOAA LCD-style export with the usual text quirks."""
    rng = np.random.RandomState(0)
    n = 40
    df = pd.DataFrame({
        "STATION": ["WBAN:94789"] * n,
        "DATE": pd.date_range("2016-01-01 00:51", periods=n, freq="h").strftime("%Y-%m-%d %H:%M"),
        "HOURLYRelativeHumidity": rng.randint(30, 100, size=n).astype(float),
        "HOURLYDRYBULBTEMPF": rng.randint(20, 80, size=n).astype(float),
        "HOURLYPrecip": [PRECIP_TEXT[i % len(PRECIP_TEXT)] for i in range(n)],
        "HOURLYWindSpeed": rng.randint(0, 25, size=n).astype(float),
        "HOURLYStationPressure": np.round(rng.uniform(29.5, 30.5, size=n), 2),
    })
    df.loc[7, "HOURLYRelativeHumidity"] = np.nan
    return df


@pytest.fixture
def dataset(raw_frame):
    return prepare_dataset(raw_frame)


@pytest.fixture
def raw_csv(tmp_path, raw_frame):
    path = tmp_path / "lcd.csv"
    raw_frame.to_csv(path, index=False)
    return path
