"""News ingestion and normalization pipeline for the trading dashboard."""

__version__ = "0.1.0"
