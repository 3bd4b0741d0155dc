"""
Unit tests for the FormDataAPIClient.

Tests the API client functionality including error handling
and response parsing.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from registration_dashboard.api.client import APIError, FormDataAPIClient


class TestFormDataAPIClient:
    """Test cases for FormDataAPIClient."""

    def setup_method(self):
        """Set up test fixtures."""
        self.client = FormDataAPIClient(
            url="http://test-api.com/api/getFormData",
            token="secret-token",
            timeout=10
        )

    def test_init_default_settings(self):
        """Test client initialization with default settings."""
        with patch('registration_dashboard.api.client.get_settings') as mock_settings:
            mock_settings.return_value.form_data_api_url = "http://default.com/api/getFormData"
            mock_settings.return_value.form_data_api_token = "default-token"
            mock_settings.return_value.form_data_api_timeout = 30

            client = FormDataAPIClient()
            assert client.url == "http://default.com/api/getFormData"
            assert client.token == "default-token"
            assert client.timeout == 30

    def test_init_custom_settings(self):
        """Test client initialization with custom settings."""
        assert self.client.url == "http://test-api.com/api/getFormData"
        assert self.client.token == "secret-token"
        assert self.client.timeout == 10

    @patch('registration_dashboard.api.client.requests.request')
    def test_make_request_sends_bearer_token(self, mock_request):
        """Test the Authorization header and timeout are sent."""
        mock_request.return_value = Mock(status_code=200)

        self.client._make_request("GET")

        mock_request.assert_called_once()
        call_kwargs = mock_request.call_args[1]
        assert call_kwargs['method'] == "GET"
        assert call_kwargs['url'] == "http://test-api.com/api/getFormData"
        assert call_kwargs['headers']['Authorization'] == "Bearer secret-token"
        assert call_kwargs['timeout'] == 10

    @patch('registration_dashboard.api.client.requests.request')
    def test_make_request_without_token(self, mock_request):
        """Test no Authorization header is sent when no token is configured."""
        mock_request.return_value = Mock(status_code=200)
        with patch('registration_dashboard.api.client.get_settings') as mock_settings:
            mock_settings.return_value.form_data_api_token = None
            client = FormDataAPIClient(url="http://test-api.com", timeout=5)

        client._make_request("GET")

        assert "Authorization" not in mock_request.call_args[1]['headers']

    @patch('registration_dashboard.api.client.requests.request')
    def test_make_request_does_not_retry(self, mock_request):
        """Test a network failure is reported after a single attempt."""
        mock_request.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(APIError) as exc_info:
            self.client._make_request("GET")

        assert mock_request.call_count == 1
        assert "Connection refused" in str(exc_info.value)
        assert exc_info.value.status_code is None

    @patch('registration_dashboard.api.client.requests.request')
    def test_make_request_api_error(self, mock_request):
        """Test API error handling."""
        mock_response = Mock()
        mock_response.status_code = 401
        mock_response.text = "Unauthorized"
        mock_request.return_value = mock_response

        with pytest.raises(APIError) as exc_info:
            self.client._make_request("GET")

        assert "HTTP 401" in str(exc_info.value)
        assert exc_info.value.status_code == 401

    @patch('registration_dashboard.api.client.requests.request')
    def test_fetch_form_data_success(self, mock_request, raw_payload):
        """Test successful form data retrieval."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_response.json.return_value = raw_payload
        mock_request.return_value = mock_response

        form_data = self.client.fetch_form_data()

        assert len(form_data.completed_sessions) == 2
        assert len(form_data.incomplete_sessions) == 2
        assert form_data.completed_sessions[0]["name"] == "Asha Rao"

    @patch('registration_dashboard.api.client.requests.request')
    def test_fetch_form_data_missing_lists(self, mock_request):
        """Test absent session lists are read as empty."""
        mock_response = Mock(status_code=200)
        mock_response.json.return_value = {"completedSessions": [{"sessionId": "1"}]}
        mock_request.return_value = mock_response

        form_data = self.client.fetch_form_data()

        assert len(form_data.completed_sessions) == 1
        assert form_data.incomplete_sessions == []

    @patch('registration_dashboard.api.client.requests.request')
    def test_fetch_form_data_invalid_json(self, mock_request):
        """Test a non-JSON body is reported as an API error."""
        mock_response = Mock(status_code=200)
        mock_response.json.side_effect = ValueError("Expecting value")
        mock_request.return_value = mock_response

        with pytest.raises(APIError) as exc_info:
            self.client.fetch_form_data()

        assert "Failed to parse" in str(exc_info.value)

    @patch('registration_dashboard.api.client.requests.request')
    def test_fetch_form_data_unexpected_shape(self, mock_request):
        """Test a JSON body that is not an object is reported as an API error."""
        mock_response = Mock(status_code=200)
        mock_response.json.return_value = ["not", "an", "object"]
        mock_request.return_value = mock_response

        with pytest.raises(APIError) as exc_info:
            self.client.fetch_form_data()

        assert "Unexpected form data response" in str(exc_info.value)

    @patch('registration_dashboard.api.client.requests.request')
    def test_health_check_success(self, mock_request):
        """Test successful health check."""
        mock_request.return_value = Mock(status_code=200)

        health = self.client.health_check()

        assert health["status"] == "healthy"
        assert health["status_code"] == 200

    @patch('registration_dashboard.api.client.requests.request')
    def test_health_check_failure(self, mock_request):
        """Test health check reports failures instead of raising."""
        mock_request.return_value = Mock(status_code=503, text="Service Unavailable")

        health = self.client.health_check()

        assert health["status"] == "unhealthy"
        assert health["status_code"] == 503
        assert "HTTP 503" in health["error"]
