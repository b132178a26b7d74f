"""Utility functions."""

from clinic.utils.time import clinic_now, to_clinic_time, utc_now

__all__ = ["utc_now", "clinic_now", "to_clinic_time"]
