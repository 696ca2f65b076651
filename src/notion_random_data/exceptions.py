"""Custom exceptions for notion-random-data."""

from enum import Enum


class ClientErrorCode(str, Enum):
    """Errors raised on our side of the HTTP round trip."""

    REQUEST_TIMEOUT = "notionhq_client_request_timeout"
    RESPONSE_ERROR = "notionhq_client_response_error"


class APIErrorCode(str, Enum):
    """Error codes reported by the Notion API."""

    UNAUTHORIZED = "unauthorized"
    RESTRICTED_RESOURCE = "restricted_resource"
    OBJECT_NOT_FOUND = "object_not_found"
    RATE_LIMITED = "rate_limited"
    INVALID_JSON = "invalid_json"
    INVALID_REQUEST_URL = "invalid_request_url"
    INVALID_REQUEST = "invalid_request"
    VALIDATION_ERROR = "validation_error"
    CONFLICT_ERROR = "conflict_error"
    INTERNAL_SERVER_ERROR = "internal_server_error"
    SERVICE_UNAVAILABLE = "service_unavailable"


class NotionRandomDataError(Exception):
    """Base exception for all notion-random-data errors."""


class ConfigurationError(NotionRandomDataError):
    """Configuration or environment variable error."""


class ExampleError(NotionRandomDataError):
    """A scripted example step cannot run against the given database."""


class UnreachableVariantError(NotionRandomDataError):
    """A tagged value carried a variant outside its closed set."""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Didn't expect to get here: unhandled variant {value!r}")


class NotionClientError(NotionRandomDataError):
    """Error raised by the Notion client."""

    def __init__(self, code: ClientErrorCode | APIErrorCode, message: str):
        self.code = code
        super().__init__(message)


class RequestTimeoutError(NotionClientError):
    """The request did not complete before the client timeout."""

    def __init__(self, timeout: float | None = None):
        self.timeout = timeout
        message = f"Request to Notion API timed out after {timeout}s" if timeout else "Request to Notion API timed out"
        super().__init__(ClientErrorCode.REQUEST_TIMEOUT, message)


class UnknownHTTPResponseError(NotionClientError):
    """HTTP failure whose body is not a Notion error object."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(
            ClientErrorCode.RESPONSE_ERROR,
            f"Request to Notion API failed with status {status_code}: {body}",
        )


class NotionAPIError(NotionClientError):
    """Error from Notion API."""

    def __init__(self, status_code: int, code: APIErrorCode, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(code, f"Notion API error ({status_code}, {code.value}): {message}")


class RateLimitError(NotionAPIError):
    """Rate limit exceeded error."""

    def __init__(self, retry_after: int | None = None, message: str | None = None):
        self.retry_after = retry_after
        if message is None:
            message = f"Rate limited (retry after {retry_after}s)" if retry_after else "Rate limited"
        super().__init__(429, APIErrorCode.RATE_LIMITED, message)


def is_notion_client_error(error: BaseException) -> bool:
    """Return True for any error raised by the Notion client."""
    return isinstance(error, NotionClientError)
