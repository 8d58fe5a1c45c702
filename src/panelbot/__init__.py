"""Fetch Grafana dashboard panels from chat commands."""

__version__ = "0.1.0"
