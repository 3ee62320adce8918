"""Saved message template library."""
