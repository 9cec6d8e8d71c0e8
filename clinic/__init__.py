"""Clinic booking service: directory browsing, booking wizard and submission channels."""

__version__ = "1.0.0"
