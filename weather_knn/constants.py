"""Shared constants: column names, labels, pipeline defaults."""

# NOAA LCD source column -> canonical column
RAW_COLUMNS = {
    "DATE": "timestamp",
    "HOURLYRelativeHumidity": "relative_humidity",
    "HOURLYDRYBULBTEMPF": "dry_bulb_temp_f",
    "HOURLYPrecip": "precip",
    "HOURLYWindSpeed": "wind_speed",
    "HOURLYStationPressure": "station_pressure",
}

TIMESTAMP_COL = "timestamp"
TARGET_COL = "precip"

DATASET_COLS = list(RAW_COLUMNS.values())
NUMERIC_COLS = [c for c in DATASET_COLS if c != TIMESTAMP_COL]

FEATURE_COLS = ["relative_humidity", "dry_bulb_temp_f"]

FEATURE_LABELS = {
    "relative_humidity": "Relative Humidity (%)",
    "dry_bulb_temp_f": "Dry Bulb Temperature (°F)",
    "precip": "Hourly Precipitation (in)",
    "wind_speed": "Wind Speed (mph)",
    "station_pressure": "Station Pressure (inHg)",
}

FEATURE_UNITS = {
    "relative_humidity": "%",
    "dry_bulb_temp_f": "°F",
    "precip": "in",
    "wind_speed": "mph",
    "station_pressure": "inHg",
}

TRACE_MARKER = "T"
TRACE_VALUE = "0.0"
SNOW_MARKER = "s"
MISSING_VALUE = "0.0"

PARSE_ERROR_POLICIES = ("raise", "drop")

DEFAULT_CONFIG = {
    "seed": 1234,
    "train_fraction": 0.75,
    "k": 3,
    "polynomial_degree": 2,
    "weighted": True,
    "imputation_strategy": "median",
    "on_parse_error": "raise",
}

VARIANT_COLORS = {
    "plain": "#2A9D8F",
    "polynomial": "#E63946",
}
