"""API client module for the registration backend."""

from .client import APIError, FormDataAPIClient

__all__ = ["APIError", "FormDataAPIClient"]
