"""
Thin adapter over the ``uritemplate`` package (RFC 6570).

Only the pieces the core needs: expansion, variable discovery and the
"is this href a template" check used by Link.
"""

from typing import Any, Mapping, Optional, Set

import uritemplate


def variable_names(template: str) -> Set[str]:
    return set(uritemplate.variables(template))


def is_templated(href: str) -> bool:
    return len(variable_names(href)) > 0


def _stringify(value: Any) -> Any:
    # uritemplate quotes str values; numbers and bools are rendered the way
    # they appear in query strings.
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    return value


def expand(template: str, variables: Optional[Mapping[str, Any]] = None) -> str:
    """
    Expand a URI template. Variables that are None are treated as undefined.
    Example: expand('/p{?skip,limit}', {'skip': 0, 'limit': 5}) -> '/p?skip=0&limit=5'
    """
    values = {
        k: _stringify(v) for k, v in (variables or {}).items() if v is not None
    }
    return uritemplate.expand(template, values)


__all__ = ["variable_names", "is_templated", "expand"]
