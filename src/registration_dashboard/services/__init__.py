"""
Data services module for the registration dashboard.

This module provides the view state holder used by the dashboard and the CLI.
"""

from .data_service import DashboardState, LoadStatus

__all__ = ["DashboardState", "LoadStatus"]
