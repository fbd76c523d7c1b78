"""Declarative settings pages: definitions, field behaviors and the save pipeline."""

__version__ = "0.3.0"
