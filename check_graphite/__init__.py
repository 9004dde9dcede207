"""Graphite render API check for Nagios-compatible monitoring."""

__version__ = "0.1.0"
