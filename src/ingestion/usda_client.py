"""USDA FoodData Central API client.

API Reference: https://fdc.nal.usda.gov/api-guide.html

This client only talks HTTP and returns raw payloads; translation into
FoodSearchResult lives in nutrient_mapper.
"""

from typing import Any, Dict, List, Optional

import requests

from src.data_layer.settings import USDA_BASE_URL
from src.ingestion.errors import ProviderErrorCode, ProviderRequestError
from src.ingestion.http_client import DEFAULT_TIMEOUT_SECONDS, ProviderHTTPClient


class USDAClient(ProviderHTTPClient):
    """Client for USDA FoodData Central API.

    Usage:
        client = USDAClient(api_key="your_key")

        foods = client.search_foods("chicken breast")
        food = client.get_food(171705)
    """

    PROVIDER = "USDA"

    SEARCH_PAGE_SIZE = 20
    SEARCH_DATA_TYPES = "Foundation,Branded"

    def __init__(
        self,
        api_key: str,
        base_url: str = USDA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        """Initialize USDA client with API key.

        Args:
            api_key: USDA FoodData Central API key
            base_url: API root (overridable for tests and proxies)
            timeout: Per-request timeout in seconds
            session: Optional requests session to reuse connections

        Raises:
            ValueError: If API key is empty
        """
        if not api_key or not api_key.strip():
            raise ValueError("API key is required. Get one at https://fdc.nal.usda.gov/api-key-signup.html")
        super().__init__(base_url=base_url, timeout=timeout, session=session)
        self.api_key = api_key.strip()

    def search_foods(self, query: str) -> List[Dict[str, Any]]:
        """Search foods by free text.

        Args:
            query: Search query string

        Returns:
            Raw ``foods`` array from the search response (may be empty)

        Raises:
            ProviderRequestError: If the request fails or the body is not
                a JSON object
        """
        payload = self._get_json(
            "foods/search",
            {
                "api_key": self.api_key,
                "query": query,
                "pageSize": self.SEARCH_PAGE_SIZE,
                "dataType": self.SEARCH_DATA_TYPES,
            },
        )
        if not isinstance(payload, dict):
            raise ProviderRequestError(
                ProviderErrorCode.INVALID_RESPONSE,
                "USDA search response is not a JSON object",
                {"provider": self.PROVIDER, "query": query},
            )
        return payload.get("foods") or []

    def get_food(self, fdc_id: str) -> Dict[str, Any]:
        """Fetch one food by FDC ID.

        Raises:
            ProviderRequestError: If the request fails (404 included)
        """
        payload = self._get_json(f"food/{fdc_id}", {"api_key": self.api_key})
        if not isinstance(payload, dict):
            raise ProviderRequestError(
                ProviderErrorCode.INVALID_RESPONSE,
                f"USDA food {fdc_id} response is not a JSON object",
                {"provider": self.PROVIDER, "fdc_id": fdc_id},
            )
        return payload
