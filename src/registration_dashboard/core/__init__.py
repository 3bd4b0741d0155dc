"""Normalization, filtering and export of registration sessions."""
