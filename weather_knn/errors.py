"""Exception types raised by the precipitation pipeline."""


class WeatherKNNError(Exception):
    """Base class for pipeline errors."""


class SchemaError(WeatherKNNError):
    """Input table is missing one or more required columns."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"missing required column(s): {', '.join(self.missing)}")


class ParseError(WeatherKNNError):
    """Precipitation text could not be normalized to a finite non-negative number."""

    def __init__(self, value, row=None, reason="not a number"):
        self.value = value
        self.row = row
        self.reason = reason
        where = f" at row {row!r}" if row is not None else ""
        super().__init__(f"cannot parse precipitation value {value!r}{where}: {reason}")


class DegenerateMetricError(WeatherKNNError):
    """A metric is undefined for the given actual values."""

    def __init__(self, metric, reason):
        self.metric = metric
        self.reason = reason
        super().__init__(f"{metric} is undefined: {reason}")


class InsufficientDataError(WeatherKNNError):
    """Too few usable rows remain to split the data or fit the model."""
