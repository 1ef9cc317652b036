# clients/ml_client.py
import logging
from typing import Any, Dict, Optional

import requests

from services.errors import MLServiceError

logger = logging.getLogger(__name__)


class MLApiClient:
    """Thin JSON proxy to the external ML inference service."""

    def __init__(self, base_url: str, api_key: str = "", timeout: float = 30.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def request(self, endpoint: str, payload: Optional[Dict[str, Any]] = None, method: str = "POST") -> Any:
        url = f"{self.base_url}{endpoint}"
        try:
            if method == "GET":
                resp = self.session.get(url, headers=self._headers(), timeout=self.timeout)
            else:
                resp = self.session.request(method, url, json=payload, headers=self._headers(), timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()

        except requests.exceptions.HTTPError as e:
            detail = _error_detail(e.response)
            logger.error(f"ML API Error for {endpoint}: {e}")
            raise MLServiceError(detail) from e

        except requests.exceptions.RequestException as e:
            logger.error(f"ML API Error for {endpoint}: {e}")
            raise MLServiceError("ML API request failed") from e

    def get(self, endpoint: str) -> Any:
        return self.request(endpoint, method="GET")

    def post(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        return self.request(endpoint, payload)


def _error_detail(response: Optional[requests.Response]) -> str:
    if response is None:
        return "ML API request failed"
    try:
        body = response.json()
    except ValueError:
        return "ML API request failed"
    if isinstance(body, dict):
        detail = body.get("detail") or body.get("message")
        if detail:
            return str(detail)
    return "ML API request failed"
