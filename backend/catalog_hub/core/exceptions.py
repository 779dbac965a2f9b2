"""
Custom exception hierarchy for Catalog Hub.

Exceptions are categorized as:
- RetryableError: Transient errors that should trigger Celery retry
- NonRetryableError: Permanent errors that should fail immediately

This categorization allows Celery tasks to use:
- autoretry_for=(RetryableError,)
- dont_autoretry_for=(NonRetryableError,)
"""
from typing import Optional


# HTTP statuses from the remote catalog worth another attempt
TRANSIENT_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class CatalogHubException(Exception):
    """Base exception for Catalog Hub."""
    pass


# ============================================
# RETRYABLE ERRORS - Will trigger Celery retry
# ============================================
class RetryableError(CatalogHubException):
    """
    Base class for errors that should trigger retry.

    Use this for transient errors where retrying might succeed:
    - Network timeouts
    - Rate limits
    - Temporary service unavailability
    """
    pass


class RemoteAPIError(RetryableError):
    """
    Error from the remote catalog API (4over).

    status_code is None when the request never produced a response
    (connection refused, timeout). body holds the raw response text.
    """
    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: str = "",
        service: str = "4over",
    ):
        self.service = service
        self.status_code = status_code
        self.body = body
        super().__init__(f"{service} API error: {message}")

    @property
    def is_transient(self) -> bool:
        if self.status_code is None:
            return True
        return self.status_code in TRANSIENT_STATUS_CODES


# ============================================
# NON-RETRYABLE ERRORS - No automatic retry
# ============================================
class NonRetryableError(CatalogHubException):
    """
    Base class for errors that should NOT trigger retry.

    Use this for permanent errors where retrying won't help:
    - Validation failures
    - Missing configuration
    - Local store rejections
    """
    pass


class ConfigurationError(NonRetryableError):
    """
    Required configuration is missing.

    Raised for an undefined default markup or missing API credentials.
    Needs configuration fix, not retry.
    """
    pass


class RemoteRejectedError(NonRetryableError):
    """
    The remote catalog refused the request for good (401, 404, ...).

    Wraps a non-transient RemoteAPIError where a retry must not happen.
    """
    def __init__(self, error: RemoteAPIError):
        self.status_code = error.status_code
        self.body = error.body
        super().__init__(str(error))


class ValidationError(NonRetryableError):
    """Remote payload could not be parsed into the expected shape."""
    pass


class ReconciliationError(NonRetryableError):
    """Local catalog store failed while reconciling a single product."""
    def __init__(self, product_code: str, message: str):
        self.product_code = product_code
        super().__init__(f"Reconciliation failed for {product_code}: {message}")
