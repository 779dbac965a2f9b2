"""
4over HTTP client — HMAC-signed REST calls with retry and page listing.
Version: 1.0.0
"""
import hashlib
import hmac
import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import ValidationError as PydanticValidationError

from catalog_hub.core.config import Settings
from catalog_hub.core.constants.sync import (
    CATEGORIES_PATH,
    CATEGORY_PRODUCTS_PATH,
    PRODUCT_BASE_PRICES_PATH,
    PRODUCT_OPTION_GROUPS_PATH,
    PRODUCT_QUOTE_PATH,
)
from catalog_hub.core.exceptions import ConfigurationError, RemoteAPIError, ValidationError
from catalog_hub.schemas.fourover import CatalogPage, PriceTier, RemoteCategory, RemoteProduct
from catalog_hub.utils.retry import RetryPolicy

logger = logging.getLogger("fourover_client")

_QUERY_SIGNED_METHODS = ("GET", "DELETE")


class FourOverClient:
    def __init__(
        self,
        settings: Settings,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._public_key = settings.fourover_public_key
        self._private_key = settings.fourover_private_key
        self._base_url = settings.fourover_base_url.rstrip("/")
        self._timeout = settings.fourover_timeout_seconds
        self._retry = retry_policy or RetryPolicy(
            max_attempts=settings.fourover_max_attempts,
            delays=tuple(settings.fourover_retry_delays),
        )
        self._transport = transport

    # ------------------------------------------------------------------
    # Signing
    # ------------------------------------------------------------------

    def _generate_signature(self, method: str) -> str:
        """HMAC-SHA256 of the HTTP method, keyed with the hex SHA-256 of the private key."""
        if not (self._public_key and self._private_key):
            raise ConfigurationError("FOUROVER_PUBLIC_KEY and FOUROVER_PRIVATE_KEY env vars are required")

        hashed_private_key = hashlib.sha256(self._private_key.encode()).hexdigest()
        return hmac.new(
            hashed_private_key.encode(),
            method.upper().encode(),
            hashlib.sha256,
        ).hexdigest()

    def _sign(
        self, method: str, params: Optional[Dict[str, Any]]
    ) -> tuple[Dict[str, Any], Dict[str, str]]:
        signature = self._generate_signature(method)
        params = dict(params or {})
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if method.upper() in _QUERY_SIGNED_METHODS:
            params["apikey"] = self._public_key
            params["signature"] = signature
        else:
            headers["Authorization"] = f"API {self._public_key}:{signature}"
        return params, headers

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _send(
        self,
        method: str,
        path: str,
        params: Dict[str, Any],
        headers: Dict[str, str],
        json: Optional[Dict[str, Any]],
    ) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            return await client.request(
                method=method,
                url=f"{self._base_url}{path}",
                params=params,
                headers=headers,
                json=json,
            )

    async def call_fourover(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Issue a signed request and return the decoded JSON body.

        Transient failures (transport errors, 429/5xx) are retried per the
        injected RetryPolicy. Anything else, or a transient failure that
        outlives the policy, raises RemoteAPIError.
        """
        signed_params, headers = self._sign(method, params)
        attempt = 0
        while True:
            attempt += 1
            logger.info("fourover request method=%s path=%s attempt=%s", method, path, attempt)
            try:
                resp = await self._send(method, path, signed_params, headers, json)
            except httpx.TransportError as exc:
                error = RemoteAPIError(f"request to {path} failed: {exc}")
            else:
                logger.info("fourover response status=%s path=%s", resp.status_code, path)
                if resp.is_success:
                    return _decode(resp, path)
                error = RemoteAPIError(
                    f"{resp.status_code} on {path}",
                    status_code=resp.status_code,
                    body=resp.text,
                )

            if not self._retry.should_retry(error, attempt):
                logger.error("fourover request failed path=%s attempts=%s error=%s", path, attempt, error)
                raise error

            logger.warning(
                "fourover transient failure path=%s attempt=%s status=%s, retrying",
                path, attempt, error.status_code,
            )
            await self._retry.wait(attempt)

    # ------------------------------------------------------------------
    # Generic contract
    # ------------------------------------------------------------------

    async def list_page(self, resource: str, page: Optional[int] = None) -> CatalogPage:
        """Fetch one page of a listing resource."""
        params = {"page": page} if page is not None else None
        data = await self.call_fourover("GET", resource, params=params)
        return CatalogPage.from_response(data, page=page or 0)

    async def fetch(self, resource: str) -> Dict[str, Any]:
        """Fetch a single (non-listing) resource."""
        return await self.call_fourover("GET", resource)

    # ------------------------------------------------------------------
    # Typed helpers
    # ------------------------------------------------------------------

    async def list_categories_page(self, page: int) -> tuple[List[RemoteCategory], CatalogPage]:
        result = await self.list_page(CATEGORIES_PATH, page)
        return _parse_all(RemoteCategory, result.entities), result

    async def list_category_products(self, category_id: str) -> List[RemoteProduct]:
        result = await self.list_page(CATEGORY_PRODUCTS_PATH.format(category_id=category_id))
        products = _parse_all(RemoteProduct, result.entities)
        return [p.model_copy(update={"category_id": category_id}) for p in products]

    async def get_base_prices(self, product_uuid: str) -> List[PriceTier]:
        result = await self.list_page(PRODUCT_BASE_PRICES_PATH.format(product_uuid=product_uuid))
        return _parse_all(PriceTier, result.entities)

    async def get_option_groups(self, product_uuid: str) -> List[Dict[str, Any]]:
        result = await self.list_page(PRODUCT_OPTION_GROUPS_PATH.format(product_uuid=product_uuid))
        return result.entities

    async def get_product_quote(self, product_uuid: str, options: Dict[str, Any]) -> Dict[str, Any]:
        body = {"product_id": product_uuid, **options}
        return await self.call_fourover("POST", PRODUCT_QUOTE_PATH, json=body)


def _decode(resp: httpx.Response, path: str) -> Any:
    if not resp.text:
        return {}
    try:
        return resp.json()
    except ValueError as exc:
        raise RemoteAPIError(
            f"non-JSON body on {path}",
            status_code=resp.status_code,
            body=resp.text,
        ) from exc


def _parse_all(model, entities: List[Dict[str, Any]]):
    try:
        return [model.model_validate(entity) for entity in entities]
    except PydanticValidationError as exc:
        raise ValidationError(f"Unexpected {model.__name__} payload from 4over: {exc}") from exc
