"""MOR Clean job-checklist viewer."""

__version__ = "0.3.0"
