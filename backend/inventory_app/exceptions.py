"""
Inventory Service — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions for the error scenarios of the service.
How:   Each exception carries a human-readable message and an optional context
       dict. Global handlers (registered in main.py) turn them into JSON
       responses with the matching HTTP status code.
Who:   Raised by services and the fallback policy; caught by global handlers.

Exception Hierarchy:
    InventoryError (base)
    ├── ValidationError          → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── MethodNotAllowedError    → 405 Method Not Allowed
    └── FileStorageError         → 500 Internal Server Error
"""

from typing import Any, Dict, Iterable, Optional


class InventoryError(Exception):
    """
    Base exception for all inventory service errors.

    Attributes:
        message:  User-facing error description (returned in the `error` field)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InventoryError):
    """
    Raised when client input fails validation.

    When:    Blank inventory name, missing photo file, malformed body,
             photo exceeding the configured size limit.
    HTTP:    400 Bad Request
    """

    status_code = 400
    code = "validation_error"

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(InventoryError):
    """
    Raised when a requested resource does not exist.

    When:    Unknown item id, item without a photo, photo file gone from disk,
             or a path no route and no allow-list entry knows about.
    HTTP:    404 Not Found
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        if message is None:
            message = f"The requested {resource} was not found"
            if resource_id:
                message = f"{resource.capitalize()} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class MethodNotAllowedError(InventoryError):
    """
    Raised when the path is known but the HTTP method is not allowed on it.

    HTTP:    405 Method Not Allowed (with an Allow header listing `allowed`)
    """

    status_code = 405
    code = "method_not_allowed"

    def __init__(
        self,
        method: str,
        pattern: str,
        allowed: Iterable[str],
        context: Optional[Dict[str, Any]] = None,
    ):
        self.allowed = sorted(allowed)
        ctx = context or {}
        ctx.update({"method": method, "pattern": pattern, "allowed": self.allowed})
        super().__init__(message="Method Not Allowed", context=ctx)


class FileStorageError(InventoryError):
    """
    Raised when file system operations on the photo cache fail.

    When:    Disk full, permission denied, cache directory removed at runtime.
    HTTP:    500 Internal Server Error
    """

    status_code = 500
    code = "server_error"

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
