"""
Unbox (Penny Black) API client.

This module provides the single façade used by integrations to talk to the
ingest and fulfilment endpoints. All HTTP traffic goes through an injected
requests.Session, so connection pooling, TLS and proxies are configured by
the caller.

THREAD SAFETY:
    - The client only holds immutable configuration plus the session
    - Requests are issued sequentially from the calling thread
    - Sharing one session between threads is the caller's decision

RETRIES:
    Only send_order() retries, and only on ServerError or
    ServiceUnavailableError, up to MAX_ATTEMPTS attempts with no delay.

Usage:
    client = UnboxAPIClient(api_key="pk-secret", is_test=True)

    client.install_store("store.example.com")
    client.send_order(order, customer, origin="magento")

    message = client.request_print("#1001", location_id="LOC-1")
    status = client.get_order_print_status("MERCHANT-1", "#1001")
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from enum import Enum
from pprint import pformat
from typing import TYPE_CHECKING, Dict, Any, List, Optional, Sequence, Type, Union
from urllib.parse import quote

import requests

from logging_config import get_logger
from .exceptions import (
    ApiError,
    AuthenticationError,
    ServerError,
    ServiceUnavailableError,
)
from .retry import call_with_retries

if TYPE_CHECKING:
    from config import Config
    from models import Order, Customer

PROD_URL = "https://api.pennyblack.io/"
TEST_URL = "https://api.test.pennyblack.io/"

MAX_ATTEMPTS = 3
SUCCESS_STATUS_CODES = (200, 201, 202, 204)
AUTHENTICATION_STATUS_CODES = (401, 403)

DEFAULT_TIMEOUT = 30.0

ApiResponse = Union[Dict[str, Any], List[Any]]


class ResponseCategory(Enum):
    """Outcome of an HTTP status code, one per branch of the dispatch."""

    SERVICE_UNAVAILABLE = "service_unavailable"
    """Any status above 500."""

    SERVER_ERROR = "server_error"
    """Exactly 500."""

    AUTHENTICATION = "authentication"
    """401 or 403."""

    SUCCESS = "success"
    """200, 201, 202 or 204."""

    API_ERROR = "api_error"
    """Anything else."""


def classify_status(status_code: int) -> ResponseCategory:
    """Map every HTTP status code to exactly one ResponseCategory."""
    if status_code > 500:
        return ResponseCategory.SERVICE_UNAVAILABLE
    if status_code == 500:
        return ResponseCategory.SERVER_ERROR
    if status_code in AUTHENTICATION_STATUS_CODES:
        return ResponseCategory.AUTHENTICATION
    if status_code in SUCCESS_STATUS_CODES:
        return ResponseCategory.SUCCESS
    return ResponseCategory.API_ERROR


def is_retryable(error: BaseException) -> bool:
    """Transient upstream failures worth another immediate attempt."""
    return isinstance(error, (ServerError, ServiceUnavailableError))


def _json_default(value: Any) -> Any:
    """
    Encode Decimal amounts as JSON numbers via float.

    The API reads amounts as floating point, so digits beyond float
    precision (about 15-17 significant digits) are rounded away.
    """
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class UnboxAPIClient:
    """
    Client for the Penny Black ingest and fulfilment API.

    One method per remote operation. Every method either returns the parsed
    response or raises an UnboxError subclass; errors are never swallowed.

    Attributes:
        base_url: Production or sandbox root URL, chosen by is_test
        origin_app_version: Default integration version sent on ingest calls
    """

    def __init__(
        self,
        api_key: str,
        is_test: bool = False,
        origin_app_version: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_TIMEOUT,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the API client.

        Args:
            api_key: Penny Black API key, sent as X-Api-Key on every request
            is_test: Use the sandbox host instead of production
            origin_app_version: Version of your integration (not the platform),
                used by Penny Black support when debugging. Can also be passed
                per call to install_store() and send_order().
            session: Transport used to send requests (creates one if not provided)
            timeout: Seconds passed to the transport for each request
            logger: Logger instance (creates default if not provided)

        Raises:
            ValueError: If api_key is empty
        """
        if not api_key:
            raise ValueError("api_key is required")

        self._api_key = api_key
        self._session = session or requests.Session()
        self._timeout = timeout
        self._logger = logger or get_logger("core.api_client")
        self.base_url = TEST_URL if is_test else PROD_URL
        self.origin_app_version = origin_app_version

    @classmethod
    def from_config(
        cls,
        config: Type[Config],
        session: Optional[requests.Session] = None
    ) -> "UnboxAPIClient":
        """
        Create a client from a Config class (see config.py).

        Raises:
            ValueError: If the config has no API key
        """
        return cls(
            api_key=config.API_KEY,
            is_test=config.TEST_MODE,
            origin_app_version=config.ORIGIN_APP_VERSION,
            session=session,
            timeout=config.TIMEOUT,
        )

    # =========================================================================
    # INGEST
    # =========================================================================

    def install_store(self, shop_url: str, origin_app_version: str = "") -> ApiResponse:
        """
        Register a store installation.

        Args:
            shop_url: Domain of the shop being installed
            origin_app_version: Overrides the client's default version

        Returns:
            Parsed response body
        """
        params: Dict[str, Any] = {"shop_url": shop_url}
        self._add_origin_app_version(params, origin_app_version)

        return self._send_post_request("ingest/install", params)

    def send_order(
        self,
        order: Order,
        customer: Customer,
        origin: str,
        origin_app_version: str = ""
    ) -> ApiResponse:
        """
        Send an order for ingestion, retrying errors that are possibly
        down to network transmission.

        Args:
            order: Order builder, serialized here
            customer: Customer builder, serialized here
            origin: Name of the calling platform (e.g. "magento")
            origin_app_version: Overrides the client's default version

        Returns:
            Parsed response body

        Raises:
            ValidationError: If the order or customer is incomplete (nothing is sent)
            ServerError, ServiceUnavailableError: If every attempt failed
        """
        params: Dict[str, Any] = {
            "order": order.to_dict(),
            "customer": customer.to_dict(),
            "origin": origin,
        }
        self._add_origin_app_version(params, origin_app_version)

        return call_with_retries(
            lambda: self._send_post_request("ingest/order", params),
            max_attempts=MAX_ATTEMPTS,
            is_retryable=is_retryable,
        )

    # =========================================================================
    # FULFILMENT
    # =========================================================================

    def request_print(
        self,
        order_id: str,
        location_id: Optional[str] = None,
        merchant_id: Optional[str] = None,
        retry: bool = True
    ) -> str:
        """
        Request a print for a single fulfilment order.

        Args:
            order_id: Platform order id or customer-facing order number
            location_id: Print location, needed when several printers are set up
            merchant_id: Needed when fulfilling for multiple vendors (3PL)
            retry: Ask the API to print again if the order was already printed

        Returns:
            The message describing the action taken
        """
        content = {
            "order_id": order_id,
            "location_id": location_id,
            "merchant_id": merchant_id,
            "retry": retry,
        }

        output = self._send_post_request("fulfilment/orders/print", content)

        if isinstance(output, dict) and "message" in output:
            return str(output["message"])
        return pformat(output)

    def request_batch_print(
        self,
        order_ids: Sequence[str],
        location_id: Optional[str] = None,
        merchant_id: Optional[str] = None,
        retry: bool = True
    ) -> ApiResponse:
        """
        Request a print for several fulfilment orders at once.

        Returns:
            Parsed response, normally with "batch_id" and "message" keys
        """
        content = {
            "order_ids": list(order_ids),
            "location_id": location_id,
            "merchant_id": merchant_id,
            "retry": retry,
        }

        return self._send_post_request("fulfilment/orders/batch-print", content)

    def get_order_print_status(self, merchant_id: str, order_id: str) -> ApiResponse:
        """
        Fetch the print status of a fulfilment order.

        Ids are percent-encoded, so order numbers like "#1001" stay in the path.
        """
        path = f"fulfilment/orders/{quote(merchant_id, safe='')}/{quote(order_id, safe='')}"
        return self._send_get_request(path)

    # =========================================================================
    # DISPATCH
    # =========================================================================

    def _add_origin_app_version(self, params: Dict[str, Any], origin_app_version: str) -> None:
        # Explicit argument wins over the client default; omitted when neither is set
        version = origin_app_version or self.origin_app_version
        if version:
            params["origin_app_version"] = version

    def _url(self, path: str) -> str:
        return self.base_url + path.lstrip("/")

    def _send_post_request(self, path: str, content: Dict[str, Any]) -> ApiResponse:
        request = requests.Request(
            "POST",
            self._url(path),
            headers={
                "X-Api-Key": self._api_key,
                "Content-Type": "application/json",
            },
            data=json.dumps(content, default=_json_default),
        )
        return self._send_request(self._session.prepare_request(request))

    def _send_get_request(self, path: str) -> ApiResponse:
        request = requests.Request(
            "GET",
            self._url(path),
            headers={"X-Api-Key": self._api_key},
        )
        return self._send_request(self._session.prepare_request(request))

    def _send_request(self, request: requests.PreparedRequest) -> ApiResponse:
        """
        Send a prepared request and interpret the response.

        Raises:
            ServiceUnavailableError: Status above 500
            ServerError: Status 500
            AuthenticationError: Status 401 or 403
            ApiError: Any other non-success status, or the transport failed
        """
        self._logger.debug(f"{request.method} {request.url}")

        try:
            # Proxy, TLS and stream settings from the session and environment
            settings = self._session.merge_environment_settings(request.url, {}, None, None, None)
            response = self._session.send(request, timeout=self._timeout, **settings)
        except requests.RequestException as e:
            self._logger.error(f"{request.method} {request.url} failed: {e}")
            raise ApiError(str(e)) from e

        status_code = response.status_code
        category = classify_status(status_code)

        if category is ResponseCategory.SERVICE_UNAVAILABLE:
            self._logger.warning(f"{request.method} {request.url} returned {status_code}")
            raise ServiceUnavailableError(response.text, status_code)

        if category is ResponseCategory.SERVER_ERROR:
            self._logger.warning(f"{request.method} {request.url} returned 500")
            raise ServerError(response.text)

        if category is ResponseCategory.AUTHENTICATION:
            self._logger.error(f"{request.method} {request.url} rejected the API key ({status_code})")
            raise AuthenticationError(status_code)

        if category is ResponseCategory.SUCCESS:
            return self._parse_success_body(response)

        self._logger.error(f"{request.method} {request.url} returned {status_code}")
        raise ApiError(response.text, status_code)

    def _parse_success_body(self, response: requests.Response) -> ApiResponse:
        """
        Decode a successful response body.

        Mappings are returned as-is, empty or undecodable bodies become {},
        and any other JSON value is wrapped in a single-element list.
        """
        try:
            output = response.json()
        except ValueError:
            self._logger.debug("Response body is empty or not JSON")
            output = None

        if isinstance(output, dict):
            return output
        if not output:
            return {}
        return [output]
