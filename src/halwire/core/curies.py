"""
CURI handling: matching, compacting and expanding link-relation types.

A CURI is a ``curies`` link whose name is a short prefix and whose href is a
template containing ``{rel}``:

    x -> http://example.org/rels/{rel}

``http://example.org/rels/product`` is the expanded form of the relation,
``x:product`` its curied form.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Optional

from .errors import HalValueError, RelMismatchError
from .link import CURIES_REL, REL_PLACEHOLDER, Link


class CuriTemplate:
    """Matches, compacts and expands relation types against one CURI link."""

    def __init__(self, curi: Link):
        if curi.rel != CURIES_REL:
            raise HalValueError("Parameter is not a CURI link.")
        if not curi.name:
            raise HalValueError("Parameter is not a CURI link: the CURI name is missing.")
        if REL_PLACEHOLDER not in curi.href:
            raise HalValueError(
                "Href of the CURI does not contain the required {rel} placeholder."
            )
        self.curi = curi
        self.name: str = curi.name
        self.template: str = curi.href
        prefix, _, suffix = curi.href.partition(REL_PLACEHOLDER)
        self._rel_prefix = prefix
        self._rel_suffix = suffix
        # {rel} captures exactly one path segment
        self._expanded_pattern = re.compile(
            re.escape(prefix) + r"([^/]+)" + re.escape(suffix)
        )

    def is_matching_curied_rel(self, rel: str) -> bool:
        name, sep, _ = rel.partition(":")
        return bool(sep) and name == self.name

    def is_matching_expanded_rel(self, rel: str) -> bool:
        return self._expanded_pattern.fullmatch(rel) is not None

    def is_matching(self, rel: str) -> bool:
        return self.is_matching_curied_rel(rel) or self.is_matching_expanded_rel(rel)

    def rel_placeholder_from(self, rel: str) -> str:
        """The {rel} value: 'product' from 'x:product' or from the expanded URI."""
        if self.is_matching_curied_rel(rel):
            return rel.partition(":")[2]
        match = self._expanded_pattern.fullmatch(rel)
        if match is None:
            raise RelMismatchError(rel, self.template)
        return match.group(1)

    def curied_rel_from(self, rel: str) -> str:
        if self.is_matching_curied_rel(rel):
            return rel
        return f"{self.name}:{self.rel_placeholder_from(rel)}"

    def expanded_rel_from(self, rel: str) -> str:
        if self.is_matching_expanded_rel(rel):
            return rel
        return self._rel_prefix + self.rel_placeholder_from(rel) + self._rel_suffix

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CuriTemplate):
            return NotImplemented
        return self.curi == other.curi

    def __hash__(self) -> int:
        return hash(self.curi)

    def __repr__(self) -> str:
        return f"CuriTemplate(name={self.name!r}, template={self.template!r})"


def curi_template_for(curi: Link) -> CuriTemplate:
    return CuriTemplate(curi)


def matching_curi_template_for(
    curies: Iterable[Link], rel: str
) -> Optional[CuriTemplate]:
    """First template (in list order) matching rel in curied or expanded form."""
    for candidate in curies:
        template = CuriTemplate(candidate)
        if template.is_matching(rel):
            return template
    return None


class Curies:
    """
    Registry of CURI templates keyed by prefix name.

    ``register`` is the only in-place mutation and is meant for initialising a
    registry that has not been shared yet. Composition across documents goes
    through ``merge_with``, which returns a new registry.
    """

    def __init__(self, curies: Iterable[Link] = ()):
        self._templates: Dict[str, CuriTemplate] = {}
        for curi in curies:
            self.register(curi)

    @classmethod
    def empty(cls) -> "Curies":
        return cls()

    @classmethod
    def from_links(cls, links) -> "Curies":
        """Registry of the ``curies`` entries of a Links collection."""
        return cls(links.get_links_by(CURIES_REL))

    @classmethod
    def copy_of(cls, other: "Curies") -> "Curies":
        copy = cls()
        copy._templates = dict(other._templates)
        return copy

    def register(self, curi: Link) -> None:
        template = CuriTemplate(curi)
        self._templates[template.name] = template

    def merge_with(self, other: "Curies") -> "Curies":
        """New registry with the entries of both; ``other`` wins on name collisions."""
        merged = Curies.copy_of(self)
        for template in other._templates.values():
            merged._templates[template.name] = template
        return merged

    def resolve(self, rel: str) -> str:
        """Curied form of rel if a registered template matches, else rel unchanged."""
        for template in self._templates.values():
            if template.is_matching_curied_rel(rel):
                return rel
        for template in self._templates.values():
            if template.is_matching_expanded_rel(rel):
                return template.curied_rel_from(rel)
        return rel

    def expand(self, rel: str) -> str:
        """Expanded form of a curied rel with a registered prefix, else rel unchanged."""
        template = self._templates.get(rel.partition(":")[0]) if ":" in rel else None
        if template is None:
            return rel
        return template.expanded_rel_from(rel)

    def get_template(self, name: str) -> Optional[CuriTemplate]:
        return self._templates.get(name)

    def get_curies(self) -> List[Link]:
        return [template.curi for template in self._templates.values()]

    def is_empty(self) -> bool:
        return not self._templates

    def __contains__(self, curi: object) -> bool:
        if not isinstance(curi, Link) or curi.name is None:
            return False
        template = self._templates.get(curi.name)
        return template is not None and template.template == curi.href

    def __len__(self) -> int:
        return len(self._templates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Curies):
            return NotImplemented
        return self.get_curies() == other.get_curies()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Curies({self.get_curies()!r})"


def empty_curies() -> Curies:
    return Curies.empty()


__all__ = [
    "CuriTemplate",
    "Curies",
    "curi_template_for",
    "matching_curi_template_for",
    "empty_curies",
]
