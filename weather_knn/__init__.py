"""Hourly precipitation prediction from NOAA station data with k-nearest neighbors."""

__version__ = "0.1.0"
