"""Verification engine for log-splitting pipelines."""

__version__ = "0.1.0"
