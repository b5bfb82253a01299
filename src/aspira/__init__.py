"""Aspira: local aspiration intake with tracking codes."""

__version__ = "0.1.0"
