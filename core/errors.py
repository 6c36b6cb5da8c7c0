# =============================================================================
# core/errors.py  -  Error taxonomy
# =============================================================================
#
# Three error kinds are raised by core/:
#   - ValidationError: the caller's parameters failed the schema
#   - RequestError:    the upstream API answered with a non-success status
#   - ResponseError:   a success status whose body is not a JSON array
#
# Transport failures (DNS, connection reset, ...) are NOT wrapped.  They
# propagate as httpx.HTTPError and the tool layer handles them alongside
# ItemsError.  Nothing here is ever retried.
# =============================================================================


class ItemsError(Exception):
    """Base class for errors raised by the items pipeline."""


class ValidationError(ItemsError):
    """Parameters failed the fixed schema.

    ``problems`` keeps the individual ``"<field>: <reason>"`` entries in the
    order they were found; the message joins them with ", ".
    """

    def __init__(self, problems: list[str]):
        self.problems = list(problems)
        super().__init__(f"Invalid parameters: {', '.join(self.problems)}")


class RequestError(ItemsError):
    """Upstream answered with a non-success status code."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"HTTP error! status: {status_code}")


class ResponseError(ItemsError):
    """Upstream answered 2xx but the body is not a JSON array."""
