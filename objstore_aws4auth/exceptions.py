"""
Exceptions raised by objstore-aws4auth.

"""

# Licensed under the MIT License:
# http://opensource.org/licenses/MIT


class AWS4AuthError(Exception):
    """Base class for all objstore-aws4auth errors."""


class RegionMapError(AWS4AuthError, ValueError):
    """
    A region map was supplied without a default (empty suffix) entry.

    Raised at construction time, never while signing.

    """


class SigningError(AWS4AuthError):
    """
    The signature could not be computed.

    A request that failed to sign must be rejected rather than forwarded with
    a missing or partial Authorization header.

    """


class UnsignableRequestError(SigningError):
    """Payload signing was requested for a request with a non-empty body."""
