from __future__ import annotations


class CacheError(Exception):
    """Base class for recoverable cache errors.

    Each subclass carries a short machine-readable ``code`` that the HTTP
    boundary puts on the wire and the client maps back onto the class.
    """

    code = "cache_error"


class InvalidCapacity(CacheError, ValueError):
    code = "invalid_capacity"


class InvalidTTL(CacheError, ValueError):
    code = "invalid_ttl"


class NotConfigured(CacheError, RuntimeError):
    code = "not_configured"


class InvalidRequest(CacheError, ValueError):
    code = "invalid_request"


ERRORS_BY_CODE = {cls.code: cls for cls in (InvalidCapacity, InvalidTTL, NotConfigured, InvalidRequest)}
