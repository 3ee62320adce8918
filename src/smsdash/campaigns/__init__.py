"""Campaigns and their delivery counters."""
