"""halwire package exports."""

from .core import (
    CuriTemplate,
    Curies,
    Embedded,
    EmbeddedTypeInfo,
    HalError,
    HalModelValidationError,
    HalParseError,
    HalParser,
    HalRepresentation,
    HalValueError,
    Link,
    Links,
    RelMismatchError,
    TraversionError,
    curi,
    embedded,
    link,
    linking_to,
    parse,
    with_embedded,
)
from .paging import NumberedPaging, PagingRel, SkipLimitPaging
from .traverson import Traverson, httpx_link_resolver

__version__ = "0.1.0"

__all__ = [
    # Model
    "Link",
    "Links",
    "Embedded",
    "HalRepresentation",
    "CuriTemplate",
    "Curies",
    "link",
    "curi",
    "linking_to",
    "embedded",
    # Parsing
    "HalParser",
    "EmbeddedTypeInfo",
    "parse",
    "with_embedded",
    # Paging
    "PagingRel",
    "SkipLimitPaging",
    "NumberedPaging",
    # Traversal
    "Traverson",
    "httpx_link_resolver",
    # Exceptions
    "HalError",
    "HalValueError",
    "RelMismatchError",
    "HalParseError",
    "HalModelValidationError",
    "TraversionError",
]
