"""
Inventory Service — Fallback Route Policy
==========================================

What:  Decides between 404 and 405 for requests no route handled.
How:   A fixed allow-list keyed by route pattern. A path that matches a
       pattern with a method outside its set gets 405; any other path gets 404.
Who:   Called by the HTTP exception handler in main.py.
"""

import re
from typing import Dict, FrozenSet, List, Optional, Pattern, Tuple

from inventory_app.exceptions import InventoryError, MethodNotAllowedError, NotFoundError

ALLOWED_ROUTES: Dict[str, FrozenSet[str]] = {
    "/register": frozenset({"POST"}),
    "/inventory": frozenset({"GET"}),
    "/inventory/:id": frozenset({"GET", "PUT", "DELETE"}),
    "/inventory/:id/photo": frozenset({"GET", "PUT"}),
    "/search": frozenset({"POST"}),
    "/RegisterForm.html": frozenset({"GET"}),
    "/SearchForm.html": frozenset({"GET"}),
}


def _compile(pattern: str) -> Pattern[str]:
    # ":name" matches exactly one path segment
    parts = [
        "[^/]+" if segment.startswith(":") else re.escape(segment)
        for segment in pattern.split("/")
    ]
    return re.compile("^" + "/".join(parts) + "$")


_COMPILED: List[Tuple[str, Pattern[str]]] = [
    (pattern, _compile(pattern)) for pattern in ALLOWED_ROUTES
]


def match_pattern(path: str) -> Optional[str]:
    """The allow-list pattern `path` belongs to, or None."""
    for pattern, regex in _COMPILED:
        if regex.match(path):
            return pattern
    return None


def resolve_unmatched(method: str, path: str) -> InventoryError:
    """
    Build the error for a request that no route handled.

    Returns:
        MethodNotAllowedError when the path is known but the method is not
        allowed on it, NotFoundError otherwise.
    """
    pattern = match_pattern(path)
    method = method.upper()
    if pattern is not None:
        allowed = ALLOWED_ROUTES[pattern]
        if method not in allowed:
            return MethodNotAllowedError(method=method, pattern=pattern, allowed=allowed)
    return NotFoundError(message="Not Found", context={"method": method, "path": path})
