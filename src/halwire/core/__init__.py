"""Core HAL+JSON model for halwire (transport-agnostic)."""

from .curies import (
    CuriTemplate,
    Curies,
    curi_template_for,
    empty_curies,
    matching_curi_template_for,
)
from .embedded import Embedded, EmbeddedBuilder, embedded, embedded_builder, empty_embedded
from .errors import (
    HalError,
    HalModelValidationError,
    HalParseError,
    HalValueError,
    RelMismatchError,
    TraversionError,
)
from .link import (
    CURIES_REL,
    Link,
    LinkBuilder,
    always,
    collection,
    copy_of,
    curi,
    having_name,
    having_profile,
    having_type,
    item,
    link,
    link_builder,
    optionally_having_name,
    optionally_having_profile,
    optionally_having_type,
    profile,
    self_link,
    with_href,
)
from .links import Links, LinksBuilder, empty_links, linking_to, links_builder
from .parser import EmbeddedTypeInfo, HalParser, parse, with_embedded
from .representation import HalRepresentation

__all__ = [
    # Links
    "CURIES_REL",
    "Link",
    "LinkBuilder",
    "link",
    "self_link",
    "item",
    "collection",
    "profile",
    "curi",
    "link_builder",
    "copy_of",
    "with_href",
    "Links",
    "LinksBuilder",
    "empty_links",
    "linking_to",
    "links_builder",
    # Predicates
    "always",
    "having_type",
    "optionally_having_type",
    "having_profile",
    "optionally_having_profile",
    "having_name",
    "optionally_having_name",
    # CURIes
    "CuriTemplate",
    "Curies",
    "curi_template_for",
    "matching_curi_template_for",
    "empty_curies",
    # Embedded / documents
    "Embedded",
    "EmbeddedBuilder",
    "embedded",
    "embedded_builder",
    "empty_embedded",
    "HalRepresentation",
    "HalParser",
    "EmbeddedTypeInfo",
    "parse",
    "with_embedded",
    # Exceptions
    "HalError",
    "HalValueError",
    "RelMismatchError",
    "HalParseError",
    "HalModelValidationError",
    "TraversionError",
]
