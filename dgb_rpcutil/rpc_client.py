"""Minimal JSON-RPC client for reading key material from a node wallet."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any, Dict, Optional

import requests
from requests import RequestException

from .config import RPCConfig

logger = logging.getLogger(__name__)


class RPCError(RuntimeError):
    """Raised when the node responds with an RPC error."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"RPC error {code}: {message}")
        self.code = code
        self.message = message


class RPCTransportError(RuntimeError):
    """Raised when the RPC endpoint is unreachable or returns malformed data."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DigiByteRPCClient:
    """Thin JSON-RPC client for DigiByte Core compatible nodes."""

    def __init__(self, config: RPCConfig, session: requests.Session | None = None) -> None:
        self.config = config
        self._session = session or requests.Session()

    @property
    def _url(self) -> str:
        if self.config.wallet:
            return f"{self.config.base_url}/wallet/{self.config.wallet}"
        return self.config.base_url

    def call(self, method: str, params: Optional[list[Any]] = None) -> Any:
        """Perform a JSON-RPC request and return its ``result``."""

        payload = {
            "jsonrpc": "2.0",
            "id": str(uuid.uuid4()),
            "method": method,
            "params": params or [],
        }
        logger.debug("RPC call %s params=%s", method, params)
        try:
            response = self._session.post(
                self._url,
                data=json.dumps(payload),
                headers={"content-type": "application/json"},
                auth=(self.config.user, self.config.password),
                timeout=30,
            )
        except RequestException as exc:
            logger.error(
                "RPC connection failed: %s", exc, exc_info=logger.isEnabledFor(logging.DEBUG)
            )
            raise RPCTransportError(
                "RPC connection failed. Ensure the node is reachable and DGB_RPC_* settings "
                "(or ~/.dgb-rpcutil.yaml) point to the right host and port."
            ) from exc

        if response.status_code == 401:
            raise RPCTransportError(
                "Unauthorized (401). Check DGB_RPC_USER and DGB_RPC_PASSWORD.",
                status_code=response.status_code,
            )
        try:
            result = response.json()
        except ValueError as exc:
            logger.debug("RPC JSON parse error: %s", response.text, exc_info=True)
            raise RPCTransportError(
                "RPC server returned malformed JSON", status_code=response.status_code
            ) from exc
        if not isinstance(result, dict):
            raise RPCTransportError(
                "RPC server returned an unexpected payload", status_code=response.status_code
            )
        # The node reports JSON-RPC errors with HTTP 500 and a structured body.
        if result.get("error"):
            error = result["error"]
            raise RPCError(error.get("code", -1), error.get("message", "unknown"))
        if not response.ok:
            raise RPCTransportError(
                f"RPC server returned HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return result.get("result")

    def getaddressinfo(self, address: str) -> Dict[str, Any]:
        return self.call("getaddressinfo", [address])
