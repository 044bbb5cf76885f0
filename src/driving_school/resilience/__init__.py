"""Fault tolerance for store calls."""
