"""Utility helpers shared across editheme."""
