"""Utility helpers for timestamps and input validation."""
