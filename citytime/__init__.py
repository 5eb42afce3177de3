"""City Time Converter: wall-clock conversion between a fixed set of timezones."""

__version__ = "1.0.0"
