from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Optional

from .errors import HalParseError, HalValueError
from .uri_templates import is_templated

CURIES_REL = "curies"
REL_PLACEHOLDER = "{rel}"

# Wire order of the link object members.
_OPTIONAL_ATTRIBUTES = (
    "type",
    "hreflang",
    "title",
    "name",
    "deprecation",
    "profile",
)

LinkPredicate = Callable[["Link"], bool]


@dataclass(frozen=True)
class Link:
    """
    One hypermedia link: a link-relation type, an href (URI or URI template)
    and the optional HAL link attributes.

    Optional attributes are None when absent; an empty string is a present,
    empty value and is rendered on the wire. Use ``get(name)`` when "" is a
    good enough default.
    """

    rel: str
    href: str
    type: Optional[str] = None
    hreflang: Optional[str] = None
    title: Optional[str] = None
    name: Optional[str] = None
    profile: Optional[str] = None
    deprecation: Optional[str] = None
    templated: bool = field(default=False, init=False)

    def __post_init__(self) -> None:
        if not self.rel:
            raise HalValueError("The link-relation type is mandatory")
        if not self.href:
            raise HalValueError("The href parameter is mandatory")
        object.__setattr__(self, "templated", is_templated(self.href))

    def get(self, attribute: str, default: str = "") -> str:
        """Optional attribute value, or ``default`` when the attribute is absent."""
        if attribute not in _OPTIONAL_ATTRIBUTES:
            raise AttributeError(f"Link has no optional attribute {attribute!r}")
        value = getattr(self, attribute)
        return default if value is None else value

    @property
    def is_curi(self) -> bool:
        return self.rel == CURIES_REL

    def is_equivalent_to(self, other: "Link") -> bool:
        """Same rel, href, type and profile; title, name, hreflang and deprecation are ignored."""
        return (
            self.rel == other.rel
            and self.href == other.href
            and self.get("type") == other.get("type")
            and self.get("profile") == other.get("profile")
        )

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"href": self.href}
        if self.templated:
            data["templated"] = True
        for attribute in _OPTIONAL_ATTRIBUTES:
            value = getattr(self, attribute)
            if value is not None:
                data[attribute] = value
        return data

    @classmethod
    def from_dict(cls, rel: str, data: Any) -> "Link":
        if not isinstance(data, dict):
            raise HalParseError(
                f"Expected a link object for rel {rel!r}, got {type(data).__name__}"
            )
        href = data.get("href")
        if not isinstance(href, str) or not href:
            raise HalParseError(f"Link for rel {rel!r} has no href")
        kwargs: Dict[str, Optional[str]] = {}
        for attribute in _OPTIONAL_ATTRIBUTES:
            value = data.get(attribute)
            if value is not None and not isinstance(value, str):
                raise HalParseError(
                    f"Link attribute {attribute!r} for rel {rel!r} must be a string"
                )
            kwargs[attribute] = value
        return cls(rel, href, **kwargs)


class LinkBuilder:
    """Builder for links carrying the full attribute set."""

    def __init__(self, rel: str, href: str):
        self._rel = rel
        self._href = href
        self._attributes: Dict[str, Optional[str]] = {}

    def with_rel(self, rel: str) -> "LinkBuilder":
        if not rel:
            raise HalValueError("The link-relation type is mandatory")
        self._rel = rel
        return self

    def with_href(self, href: str) -> "LinkBuilder":
        if not href:
            raise HalValueError("The href parameter is mandatory")
        self._href = href
        return self

    def with_type(self, type: Optional[str]) -> "LinkBuilder":
        self._attributes["type"] = type
        return self

    def with_hreflang(self, hreflang: Optional[str]) -> "LinkBuilder":
        self._attributes["hreflang"] = hreflang
        return self

    def with_title(self, title: Optional[str]) -> "LinkBuilder":
        self._attributes["title"] = title
        return self

    def with_name(self, name: Optional[str]) -> "LinkBuilder":
        self._attributes["name"] = name
        return self

    def with_profile(self, profile: Optional[str]) -> "LinkBuilder":
        self._attributes["profile"] = profile
        return self

    def with_deprecation(self, deprecation: Optional[str]) -> "LinkBuilder":
        self._attributes["deprecation"] = deprecation
        return self

    def build(self) -> Link:
        return Link(self._rel, self._href, **self._attributes)


# --- Factories ------------------------------------------------------------- #


def link(rel: str, href: str) -> Link:
    return Link(rel, href)


def self_link(href: str) -> Link:
    return Link("self", href)


def item(href: str) -> Link:
    return Link("item", href)


def collection(href: str) -> Link:
    return Link("collection", href)


def profile(href: str) -> Link:
    return Link("profile", href)


def curi(name: str, rel_template: str) -> Link:
    """
    Create a CURI link. The template must contain the {rel} placeholder.
    Example: curi('x', 'http://example.org/rels/{rel}')
    """
    if REL_PLACEHOLDER not in (rel_template or ""):
        raise HalValueError(
            "Not a CURI template. Template is required to contain a {rel} placeholder"
        )
    if not name:
        raise HalValueError("The name of a CURI is mandatory")
    return Link(CURIES_REL, rel_template, name=name)


def link_builder(rel: str, href: str) -> LinkBuilder:
    return LinkBuilder(rel, href)


def copy_of(prototype: Link) -> LinkBuilder:
    builder = LinkBuilder(prototype.rel, prototype.href)
    builder._attributes = {
        attribute: getattr(prototype, attribute) for attribute in _OPTIONAL_ATTRIBUTES
    }
    return builder


def with_href(prototype: Link, href: str) -> Link:
    """Same link pointing somewhere else; the templated flag is re-derived."""
    return replace(prototype, href=href)


# --- Predicates ------------------------------------------------------------ #


def always() -> LinkPredicate:
    return lambda candidate: True


def having_type(type: str) -> LinkPredicate:
    return lambda candidate: candidate.get("type") == type


def optionally_having_type(type: str) -> LinkPredicate:
    return lambda candidate: candidate.get("type") in (type, "")


def having_profile(profile: str) -> LinkPredicate:
    return lambda candidate: candidate.get("profile") == profile


def optionally_having_profile(profile: str) -> LinkPredicate:
    return lambda candidate: candidate.get("profile") in (profile, "")


def having_name(name: str) -> LinkPredicate:
    return lambda candidate: candidate.get("name") == name


def optionally_having_name(name: str) -> LinkPredicate:
    return lambda candidate: candidate.get("name") in (name, "")


__all__ = [
    "CURIES_REL",
    "REL_PLACEHOLDER",
    "Link",
    "LinkBuilder",
    "LinkPredicate",
    "link",
    "self_link",
    "item",
    "collection",
    "profile",
    "curi",
    "link_builder",
    "copy_of",
    "with_href",
    "always",
    "having_type",
    "optionally_having_type",
    "having_profile",
    "optionally_having_profile",
    "having_name",
    "optionally_having_name",
]
