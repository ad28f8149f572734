"""Utility functions for healthmate."""
