"""
Registration Dashboard - reporting view for event registrations.

This package provides a Streamlit-based dashboard and a small CLI that fetch
registrant data from the registration backend, split it into completed and
incomplete sessions, filter it by event tags and export it to Excel.
"""

__version__ = "1.0.0"
__author__ = "Development Team"
__email__ = "dev@example.com"
