"""CityRadius: proximity queries over a fixed address catalog."""

__version__ = "0.1.0"
