"""
HTTP client for a running contracheck server
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from contracheck.core.errors import ContractError

logger = logging.getLogger(__name__)


class RemoteCheckError(ContractError):
    """The server could not be reached or answered with an error"""


class RemoteContractClient:
    """
    Talks to the REST API served by `contracheck serve`.

    Example usage:
        client = RemoteContractClient("http://localhost:8000")
        result = client.check_source(open("mymodule.py").read(), "mymodule.py")
    """

    def __init__(self, base_url: str, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/")

    def parse_contract(self, contract: str) -> Dict[str, Any]:
        return self._request("POST", "/api/parse-contract", {"contract": contract})

    def check_contract(self, function_source: str, contract: str, mutates: str = "",
                       pure: bool = False, receiver: Optional[str] = None,
                       inferred_not_null: Optional[List[str]] = None) -> Dict[str, Any]:
        return self._request("POST", "/api/check-contract", {
            "function_source": function_source,
            "contract": contract,
            "mutates": mutates,
            "pure": pure,
            "receiver": receiver,
            "inferred_not_null": inferred_not_null or []
        })

    def check_source(self, source: str, filename: str = "<string>") -> Dict[str, Any]:
        """
        Check source code on the server.

        Returns:
            The summary dict ("total", "clean", "results", ...)

        Raises:
            RemoteCheckError: on transport errors or an unsuccessful answer
        """
        data = self._request("POST", "/api/check-source", {"source": source, "filename": filename})
        if not data.get("success"):
            raise RemoteCheckError(data.get("error") or "Check failed")
        return data["result"]

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise RemoteCheckError(f"{method} {url} failed: {e}") from e
        except ValueError as e:
            raise RemoteCheckError(f"{method} {url} returned invalid JSON: {e}") from e
