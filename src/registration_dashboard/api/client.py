"""
HTTP client for the registration backend.

This module provides a client for the form data endpoint, which returns every
registration session grouped into completed and incomplete lists.
"""

from typing import Any, Dict, Optional

import requests
from loguru import logger
from pydantic import ValidationError

from ..config import get_settings
from ..models import FormDataResponse


class APIError(Exception):
    """Custom exception for API errors."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class FormDataAPIClient:
    """
    HTTP client for the form data endpoint.

    Issues a single authenticated GET per call. There is no retry; any
    failure is reported as an ``APIError``.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[int] = None,
    ):
        """
        Initialize the API client.

        Args:
            url: Form data endpoint URL
            token: Bearer token for the Authorization header
            timeout: Request timeout in seconds
        """
        settings = get_settings()
        self.url = url or settings.form_data_api_url
        self.token = token or settings.form_data_api_token
        self.timeout = timeout or settings.form_data_api_timeout

        if not self.token:
            logger.warning("No API token configured, requests will be sent unauthenticated")

        logger.info(f"Initialized FormDataAPIClient with url: {self.url}")

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def _make_request(self, method: str = "GET") -> requests.Response:
        """
        Make a single HTTP request to the form data endpoint.

        Args:
            method: HTTP method

        Returns:
            requests.Response: HTTP response

        Raises:
            APIError: If the request fails or returns a non-success status
        """
        logger.debug(f"Making {method} request to {self.url}")

        try:
            response = requests.request(
                method=method,
                url=self.url,
                headers=self._headers(),
                timeout=self.timeout
            )
        except requests.exceptions.RequestException as e:
            raise APIError(f"Request failed: {str(e)}") from e

        if not 200 <= response.status_code < 300:
            raise APIError(f"HTTP {response.status_code}: {response.text}", response.status_code)

        logger.debug(f"Request successful: {method} {self.url}")
        return response

    def fetch_form_data(self) -> FormDataResponse:
        """
        Retrieve all registration sessions.

        Returns:
            FormDataResponse: Raw completed and incomplete session lists

        Raises:
            APIError: If the request fails or the body is not the expected JSON
        """
        response = self._make_request("GET")

        try:
            data = response.json()
        except ValueError as e:
            raise APIError(f"Failed to parse form data response: {str(e)}", response.status_code) from e

        try:
            form_data = FormDataResponse.model_validate(data)
        except ValidationError as e:
            raise APIError(f"Unexpected form data response: {str(e)}", response.status_code) from e

        logger.info(
            f"Fetched {len(form_data.completed_sessions)} completed and "
            f"{len(form_data.incomplete_sessions)} incomplete sessions"
        )
        return form_data

    def health_check(self) -> Dict[str, Any]:
        """
        Check that the endpoint is reachable and accepts the configured token.

        Returns:
            Dict[str, Any]: Health status information
        """
        try:
            response = self._make_request("GET")
        except APIError as e:
            logger.error(f"Health check failed: {str(e)}")
            return {"status": "unhealthy", "error": e.message, "status_code": e.status_code}
        return {"status": "healthy", "status_code": response.status_code}
