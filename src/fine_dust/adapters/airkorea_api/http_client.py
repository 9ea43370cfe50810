"""HTTP client for AirKorea API requests.

Every operation answers with the data.go.kr envelope:
``{"response": {"header": {"resultCode", "resultMsg"}, "body": {"items": [...]}}}``.
"""

import logging
from typing import Any

from fine_dust.adapters.airkorea_api.constants import RESULT_CODE_OK
from fine_dust.adapters.http.json_http_client import JsonHttpClient
from fine_dust.domain.errors import UpstreamError

logger = logging.getLogger(__name__)


class AirKoreaHttpClient:
    """Calls AirKorea operations and unwraps their envelope."""

    def __init__(self, http_client: JsonHttpClient, base_url: str, service_key: str) -> None:
        """Initialize the client.

        Args:
            http_client: Shared JSON client carrying timeout/retry/throttle policy.
            base_url: Base URL of the AirKorea APIs.
            service_key: data.go.kr service key.
        """
        self._http_client = http_client
        self._base_url = base_url.rstrip("/")
        self._service_key = service_key

    @staticmethod
    def _extract_items(data: Any, path: str) -> list[dict[str, Any]]:
        """Extract body items from the envelope, validating the result code."""
        if not isinstance(data, dict):
            raise UpstreamError(f"AirKorea {path} returned an unexpected payload")

        response = data.get("response") or {}
        header = response.get("header") or {}
        result_code = header.get("resultCode")
        if result_code is not None and str(result_code) != RESULT_CODE_OK:
            raise UpstreamError(
                f"AirKorea {path} failed: {header.get('resultMsg', 'unknown error')} "
                f"(resultCode {result_code})"
            )

        items = (response.get("body") or {}).get("items") or []
        # Some operations wrap the list as {"item": [...]}
        if isinstance(items, dict):
            items = items.get("item") or []
        if not isinstance(items, list):
            raise UpstreamError(f"AirKorea {path} returned malformed items")
        return [item for item in items if isinstance(item, dict)]

    async def get_items(self, path: str, params: dict[str, Any]) -> list[dict[str, Any]]:
        """Call an AirKorea operation and return its items.

        Args:
            path: Operation path relative to the base URL.
            params: Operation parameters (serviceKey and returnType are added).

        Returns:
            List of item dictionaries, possibly empty.
        """
        query = {"serviceKey": self._service_key, "returnType": "json", **params}
        data = await self._http_client.get_json(f"{self._base_url}{path}", params=query)
        items = self._extract_items(data, path)
        logger.debug(f"AirKorea {path} returned {len(items)} item(s)")
        return items
