"""Utility helpers for tasklane."""
