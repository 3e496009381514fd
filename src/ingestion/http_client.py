"""Shared HTTP plumbing for provider API clients."""

import logging
from typing import Any, Dict, Optional

import requests

from src.ingestion.errors import ProviderErrorCode, ProviderRequestError


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class ProviderHTTPClient:
    """Base class for JSON-over-HTTP food database clients.

    Subclasses set PROVIDER and call :meth:`_get_json`. Every transport or
    decoding failure is converted into a ProviderRequestError.
    """

    PROVIDER = "provider"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _get_json(self, path: str, params: Dict[str, Any]) -> Any:
        """GET base_url/path and decode the JSON body.

        Args:
            path: Endpoint path relative to base_url
            params: Query string parameters

        Returns:
            Decoded JSON payload

        Raises:
            ProviderRequestError: On any non-2xx status, transport error or
                undecodable body
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        context = {"provider": self.PROVIDER, "path": path}
        logger.debug("GET %s", url)

        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout:
            raise ProviderRequestError(
                ProviderErrorCode.TIMEOUT,
                f"{self.PROVIDER} API request timed out",
                context,
            )
        except requests.exceptions.ConnectionError:
            raise ProviderRequestError(
                ProviderErrorCode.CONNECTION_ERROR,
                f"Failed to connect to {self.PROVIDER} API",
                context,
            )
        except requests.exceptions.RequestException as e:
            raise ProviderRequestError(
                ProviderErrorCode.API_ERROR,
                f"Request failed: {e}",
                context,
            )

        if response.status_code == 429:
            raise ProviderRequestError(
                ProviderErrorCode.RATE_LIMITED,
                f"{self.PROVIDER} API is throttling requests",
                {**context, "status_code": 429},
            )

        if not 200 <= response.status_code < 300:
            raise ProviderRequestError(
                ProviderErrorCode.HTTP_ERROR,
                f"{self.PROVIDER} API returned status {response.status_code}",
                {**context, "status_code": response.status_code},
            )

        try:
            return response.json()
        except ValueError as e:
            raise ProviderRequestError(
                ProviderErrorCode.INVALID_RESPONSE,
                f"{self.PROVIDER} API returned a non-JSON body: {e}",
                {**context, "status_code": response.status_code},
            )
