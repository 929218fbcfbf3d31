"""JSON-RPC client for rootstock-deployments library."""

import itertools
import logging
from typing import Any, Optional, Sequence

import requests

from .exceptions import NetworkExecutionError

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """Minimal Ethereum JSON-RPC 2.0 client over HTTP."""

    def __init__(self, url: str, timeout: float = 30, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()
        self._ids = itertools.count(1)

    def call(self, method: str, params: Sequence[Any] = ()) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method, e.g., "eth_chainId"
            params: Positional parameters

        Returns:
            The "result" member of the response

        Raises:
            NetworkExecutionError: On HTTP errors, RPC errors or network failures
        """
        request_id = next(self._ids)
        logger.debug("RPC %s #%d -> %s", method, request_id, self.url)

        try:
            response = self._session.post(
                self.url,
                json={
                    "jsonrpc": "2.0",
                    "method": method,
                    "params": list(params),
                    "id": request_id,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NetworkExecutionError(f"Network error during RPC call {method}: {e}") from e

        # Check for HTTP errors
        if response.status_code != 200:
            raise NetworkExecutionError(
                f"RPC request {method} failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise NetworkExecutionError(f"Invalid JSON in RPC response to {method}") from e

        # Check for RPC errors
        if "error" in result:
            raise NetworkExecutionError(f"RPC error in {method}: {result['error']}")

        return result.get("result")
