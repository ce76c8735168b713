"""Utility functions for zkeychain."""
