"""Ktoolhu - bulk maintenance operations against the Kubernetes API."""

__version__ = "0.1.0"

APP_NAME = "ktoolhu"
