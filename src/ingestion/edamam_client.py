"""Edamam Food Database API client (parser endpoint)."""

from typing import Any, Dict, List, Optional

import requests

from src.data_layer.settings import EDAMAM_BASE_URL
from src.ingestion.errors import ProviderErrorCode, ProviderRequestError
from src.ingestion.http_client import DEFAULT_TIMEOUT_SECONDS, ProviderHTTPClient


class EdamamClient(ProviderHTTPClient):
    """Client for the Edamam food parser.

    Usage:
        client = EdamamClient(app_id="id", app_key="key")
        hints = client.parse("banana")
    """

    PROVIDER = "Edamam"

    def __init__(
        self,
        app_id: str,
        app_key: str,
        base_url: str = EDAMAM_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """Initialize Edamam client.

        Raises:
            ValueError: If either credential is empty
        """
        if not app_id or not app_id.strip() or not app_key or not app_key.strip():
            raise ValueError("Edamam app_id and app_key are both required")
        super().__init__(base_url=base_url, timeout=timeout, session=session)
        self.app_id = app_id.strip()
        self.app_key = app_key.strip()

    def parse(self, query: str) -> List[Dict[str, Any]]:
        """Run the food parser on a free-text ingredient.

        Returns:
            Raw ``hints`` array (may be empty)

        Raises:
            ProviderRequestError: If the request fails or the body is not
                a JSON object
        """
        payload = self._get_json(
            "parser",
            {
                "ingr": query,
                "app_id": self.app_id,
                "app_key": self.app_key,
            },
        )
        if not isinstance(payload, dict):
            raise ProviderRequestError(
                ProviderErrorCode.INVALID_RESPONSE,
                "Edamam parser response is not a JSON object",
                {"provider": self.PROVIDER, "query": query},
            )
        return payload.get("hints") or []
