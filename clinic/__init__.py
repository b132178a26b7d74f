"""Clinic API: patients, doctors and appointment booking."""

__version__ = "0.1.0"
