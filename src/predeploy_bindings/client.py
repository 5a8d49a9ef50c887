"""Etherscan-compatible chain data client for predeploy-bindings library."""

import logging
import random
import time
from typing import Any, Dict, Optional

import requests

from .constants import CHAIN_CONFIG
from .exceptions import ContractDataClientError
from .types import DeploymentTx

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "max rate limit reached"
RETRYABLE_STATUS_CODES = (429, 500, 502, 503, 504)


class EtherscanClient:
    """Retrieves contract artifacts from Etherscan-compatible explorer APIs."""

    def __init__(
        self,
        api_keys: Dict[str, str],
        chain_config: Optional[Dict[str, Dict[str, Any]]] = None,
        timeout: int = 30,
        retries: int = 3,
        backoff_seconds: float = 0.5,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize the client.

        Args:
            api_keys: Explorer API key per chain identifier
            chain_config: Chain configuration (defaults to CHAIN_CONFIG)
            timeout: Per-request timeout in seconds
            retries: Extra attempts for rate-limited or transient failures
            backoff_seconds: Base delay of the exponential backoff
            session: Optional requests session to reuse connections
        """
        self._api_keys = dict(api_keys)
        self._chain_config = chain_config if chain_config is not None else CHAIN_CONFIG
        self._timeout = timeout
        self._retries = max(0, retries)
        self._backoff_seconds = backoff_seconds
        self._session = session if session is not None else requests.Session()

    def fetch_interface(self, chain: str, address: str) -> str:
        """Get the verified ABI of a contract as a JSON string."""
        return self._query(chain, module="contract", action="getabi", address=address)

    def fetch_deployed_bytecode(self, chain: str, address: str) -> str:
        """Get the runtime bytecode currently deployed at an address."""
        result = self._query(
            chain, module="proxy", action="eth_getCode", address=address, tag="latest"
        )
        return _require_hex_data(result, f"Bytecode of {address} on chain '{chain}'")

    def fetch_deployment_tx_hash(self, chain: str, address: str) -> str:
        """Get the hash of the transaction that created a contract."""
        result = self._query(
            chain,
            module="contract",
            action="getcontractcreation",
            contractaddresses=address,
        )
        if (
            not isinstance(result, list)
            or not result
            or not isinstance(result[0], dict)
            or not isinstance(result[0].get("txHash"), str)
        ):
            raise ContractDataClientError(
                f"No contract creation record for {address} on chain '{chain}'"
            )
        return result[0]["txHash"]

    def fetch_deployment_tx(self, chain: str, tx_hash: str) -> DeploymentTx:
        """Get the input data and recipient of a deployment transaction."""
        result = self._query(
            chain, module="proxy", action="eth_getTransactionByHash", txhash=tx_hash
        )
        if not isinstance(result, dict) or "input" not in result:
            raise ContractDataClientError(
                f"Transaction {tx_hash} not found on chain '{chain}'"
            )
        to = result.get("to")
        if to is not None and not isinstance(to, str):
            raise ContractDataClientError(
                f"Transaction {tx_hash} on chain '{chain}' has a malformed recipient: {to!r}"
            )
        tx_input = _require_hex_data(
            result["input"], f"Input of transaction {tx_hash} on chain '{chain}'"
        )
        return DeploymentTx(input=tx_input, to=to)

    def _api_url(self, chain: str) -> str:
        if chain not in self._chain_config:
            raise ContractDataClientError(f"Unknown chain: {chain}")
        return self._chain_config[chain]["api_url"]

    def _query(self, chain: str, **params: str) -> Any:
        """
        Query the explorer API of a chain, retrying rate limits and server errors.

        Args:
            chain: Chain identifier
            **params: Explorer query parameters (module, action, ...)

        Returns:
            The "result" field of the explorer response

        Raises:
            ContractDataClientError: If the request fails or the explorer
                                     reports an error
        """
        url = self._api_url(chain)
        query = dict(params)
        api_key = self._api_keys.get(chain)
        if api_key:
            query["apikey"] = api_key

        attempts = self._retries + 1
        for attempt in range(attempts):
            last_attempt = attempt + 1 == attempts
            try:
                response = self._session.get(url, params=query, timeout=self._timeout)
            except requests.RequestException as e:
                if not last_attempt:
                    self._sleep_backoff(attempt)
                    continue
                raise ContractDataClientError(
                    f"Network error querying {chain} explorer: {e}"
                ) from e

            if response.status_code in RETRYABLE_STATUS_CODES and not last_attempt:
                self._sleep_backoff(attempt)
                continue
            if response.status_code != 200:
                raise ContractDataClientError(
                    f"Explorer request failed with status {response.status_code}"
                )

            try:
                body = response.json()
            except ValueError as e:
                raise ContractDataClientError(
                    f"Invalid JSON from {chain} explorer: {e}"
                ) from e

            if not isinstance(body, dict):
                raise ContractDataClientError(
                    f"Unexpected response from {chain} explorer: {body!r}"
                )

            # JSON-RPC proxy errors
            if "error" in body:
                raise ContractDataClientError(f"Explorer RPC error: {body['error']}")

            result = body.get("result")

            # Explorer-level errors use status "0" and put the reason in result
            if str(body.get("status", "1")) == "0":
                reason = str(result or body.get("message", ""))
                if RATE_LIMIT_MESSAGE in reason.lower() and not last_attempt:
                    logger.debug(f"Rate limited by {chain} explorer, retrying")
                    self._sleep_backoff(attempt)
                    continue
                raise ContractDataClientError(
                    f"Explorer error ({params.get('action')}): {reason}"
                )

            if result is None:
                raise ContractDataClientError(
                    f"Empty result from {chain} explorer for {params.get('action')}"
                )
            return result

        # Unreachable: the last attempt always returns or raises
        raise ContractDataClientError("Unexpected explorer retry loop exit")

    def _sleep_backoff(self, attempt: int) -> None:
        # Exponential backoff with small jitter
        delay = self._backoff_seconds * (2**attempt)
        time.sleep(delay * (1.0 + random.random() * 0.2))


def _require_hex_data(value: Any, description: str) -> str:
    """Check that an explorer value is "0x" followed by hex digits."""
    if (
        not isinstance(value, str)
        or not value.startswith("0x")
        or not all(c in "0123456789abcdefABCDEF" for c in value[2:])
    ):
        raise ContractDataClientError(f"{description} is not hex data: {value!r}")
    return value
