"""Workflow builder - visual workflow storage and simulated test runs."""

__version__ = "0.1.0"
