"""Command line interface for faultline."""
