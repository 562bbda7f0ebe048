"""HTTP client for the ParaSwap v5 REST API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from psp_calldata.config import DEFAULT_API_URL, DEFAULT_PARTNER, DEFAULT_TIMEOUT
from psp_calldata.errors import BuildFailed, CollaboratorError, QuoteUnavailable
from psp_calldata.models.request import ContractMethod, SwapSide
from psp_calldata.models.route import BuiltTransaction, PricedRoute

logger = structlog.get_logger()

# Statuses worth retrying with the same request
RETRYABLE_STATUSES = frozenset({408, 425, 429, 500, 502, 503, 504})


class ParaSwapClient:
    """Synchronous ParaSwap API client implementing both collaborators.

    Args:
        api_url: API base URL (ignored when ``client`` is given)
        timeout: Per-request timeout in seconds (ignored when ``client`` is given)
        partner: Partner id sent with price requests
        client: Preconfigured httpx client, mainly for tests
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        partner: str = DEFAULT_PARTNER,
        client: httpx.Client | None = None,
    ) -> None:
        self.partner = partner
        self._client = client or httpx.Client(base_url=api_url, timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> ParaSwapClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_rate(
        self,
        *,
        chain_id: int,
        src_token: str,
        src_decimals: int,
        dest_token: str,
        dest_decimals: int,
        amount: str,
        side: SwapSide,
        include_contract_methods: Sequence[ContractMethod] = (),
    ) -> PricedRoute:
        """Fetch a priced route from ``GET /prices``.

        Raises:
            QuoteUnavailable: On transport errors, API errors or a missing route
        """
        params: dict[str, Any] = {
            "srcToken": src_token,
            "srcDecimals": src_decimals,
            "destToken": dest_token,
            "destDecimals": dest_decimals,
            "amount": amount,
            "side": side.value,
            "network": chain_id,
            "partner": self.partner,
        }
        if include_contract_methods:
            params["includeContractMethods"] = ",".join(m.value for m in include_contract_methods)

        body = self._request(QuoteUnavailable, "GET", "/prices", params=params)
        route = body.get("priceRoute")
        if not isinstance(route, dict):
            raise QuoteUnavailable("Response carries no priceRoute")
        try:
            return PricedRoute.model_validate(route)
        except ValidationError as e:
            raise QuoteUnavailable(f"Malformed priceRoute: {e}") from e

    def build_tx(
        self,
        *,
        chain_id: int,
        src_token: str,
        src_decimals: int,
        dest_token: str,
        dest_decimals: int,
        src_amount: str,
        dest_amount: str,
        price_route: PricedRoute,
        user_address: str,
        partner: str,
        ignore_checks: bool = True,
    ) -> BuiltTransaction:
        """Build router calldata via ``POST /transactions/{network}``.

        Raises:
            BuildFailed: On transport errors, API errors or a malformed transaction
        """
        payload = {
            "srcToken": src_token,
            "srcDecimals": src_decimals,
            "destToken": dest_token,
            "destDecimals": dest_decimals,
            "srcAmount": src_amount,
            "destAmount": dest_amount,
            "priceRoute": price_route.to_payload(),
            "userAddress": user_address,
            "partner": partner,
        }
        params = {"ignoreChecks": "true"} if ignore_checks else {}

        body = self._request(
            BuildFailed, "POST", f"/transactions/{chain_id}", params=params, json=payload
        )
        try:
            return BuiltTransaction.model_validate(body)
        except ValidationError as e:
            raise BuildFailed(f"Malformed transaction: {e}") from e

    def _request(
        self,
        error_cls: type[CollaboratorError],
        method: str,
        url: str,
        **kwargs: Any,
    ) -> dict[str, Any]:
        logger.debug("paraswap_request", method=method, url=url)
        try:
            response = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise error_cls(f"{method} {url} timed out: {e}", retryable=True) from e
        except httpx.TransportError as e:
            raise error_cls(f"{method} {url} failed: {e}", retryable=True) from e

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_error:
            detail = body.get("error") if isinstance(body, dict) else None
            logger.warning(
                "paraswap_error_response",
                method=method,
                url=url,
                status=response.status_code,
                error=detail,
            )
            raise error_cls(
                f"{method} {url} returned {response.status_code}: {detail or response.text}",
                retryable=response.status_code in RETRYABLE_STATUSES,
            )
        if not isinstance(body, dict):
            raise error_cls(f"{method} {url} returned a non-object body")
        if body.get("error"):
            raise error_cls(f"{method} {url} returned error: {body['error']}")
        return body


__all__ = ["ParaSwapClient", "RETRYABLE_STATUSES"]
