"""Command line interface for panelbot."""
