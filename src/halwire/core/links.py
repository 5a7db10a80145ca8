from __future__ import annotations

from typing import Any, Dict, Iterable, Iterator, List, Optional, Set, Tuple, Union

from .curies import Curies
from .errors import HalParseError
from .link import CURIES_REL, Link, LinkPredicate, curi


class Links:
    """
    Ordered, relation-keyed collection of links (the ``_links`` object).

    Relations are keyed by their curied form whenever a CURI in scope matches
    them, so ``get_links_by`` accepts either form. Within one relation,
    equivalent links (same rel, href, type and profile) are kept once; the
    first one wins.

    A relation renders as a JSON array when it holds more than one link or was
    flagged via ``array_rels``; ``curies`` always renders as an array.
    """

    def __init__(
        self,
        links: Iterable[Link] = (),
        *,
        array_rels: Iterable[str] = (),
        curies: Optional[Curies] = None,
    ):
        links = list(links)
        self._inherited = curies if curies is not None else Curies.empty()
        self._declared_array_rels: Tuple[str, ...] = tuple(array_rels)
        own = Curies(link for link in links if link.rel == CURIES_REL)
        self._curies = self._inherited.merge_with(own)

        self._links: Dict[str, List[Link]] = {}
        for link in links:
            bucket = self._links.setdefault(self._curies.resolve(link.rel), [])
            if link.rel == CURIES_REL:
                _put_curi(bucket, link)
                continue
            if any(existing.is_equivalent_to(link) for existing in bucket):
                continue
            bucket.append(link)

        self._array_rels: Set[str] = {
            self._curies.resolve(rel) for rel in self._declared_array_rels
        }
        self._array_rels.update(rel for rel, v in self._links.items() if len(v) > 1)
        if CURIES_REL in self._links:
            self._array_rels.add(CURIES_REL)

    # --- Factories --------------------------------------------------------- #

    @classmethod
    def empty(cls) -> "Links":
        return cls()

    @classmethod
    def of(cls, *links: Link) -> "Links":
        return cls(links)

    @classmethod
    def from_list(cls, links: Iterable[Link]) -> "Links":
        return cls(links)

    @classmethod
    def builder(cls) -> "LinksBuilder":
        return LinksBuilder()

    @classmethod
    def copy_of(cls, links: "Links") -> "LinksBuilder":
        return LinksBuilder.copy_of(links)

    # --- Lookup ------------------------------------------------------------ #

    @property
    def curies(self) -> Curies:
        """CURIes in scope: inherited ones merged with the local ``curies`` entries."""
        return self._curies

    def get_rels(self) -> List[str]:
        return list(self._links)

    def get_links_by(
        self, rel: str, predicate: Optional[LinkPredicate] = None
    ) -> List[Link]:
        bucket = self._links.get(rel)
        if bucket is None:
            bucket = self._links.get(self._curies.resolve(rel), [])
        if predicate is None:
            return list(bucket)
        return [link for link in bucket if predicate(link)]

    def get_link_by(
        self, rel: str, predicate: Optional[LinkPredicate] = None
    ) -> Optional[Link]:
        links = self.get_links_by(rel, predicate)
        return links[0] if links else None

    def has_link(self, rel: str) -> bool:
        return bool(self.get_links_by(rel))

    def is_array(self, rel: str) -> bool:
        return rel in self._array_rels or self._curies.resolve(rel) in self._array_rels

    def is_empty(self) -> bool:
        return not self._links

    def __iter__(self) -> Iterator[Link]:
        for bucket in self._links.values():
            yield from bucket

    def __len__(self) -> int:
        return sum(len(bucket) for bucket in self._links.values())

    # --- Scope ------------------------------------------------------------- #

    def using(self, curies: Curies) -> "Links":
        """Same links, re-keyed against ``curies`` plus the local CURI entries."""
        return Links(self, array_rels=self._declared_array_rels, curies=curies)

    # --- Wire format ------------------------------------------------------- #

    def to_dict(self) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {}
        rels = sorted(self._links, key=lambda rel: rel != CURIES_REL)
        for rel in rels:
            bucket = self._links[rel]
            if rel in self._array_rels:
                rendered[rel] = [link.to_dict() for link in bucket]
            else:
                rendered[rel] = bucket[0].to_dict()
        return rendered

    @classmethod
    def from_dict(cls, data: Any, *, curies: Optional[Curies] = None) -> "Links":
        if not isinstance(data, dict):
            raise HalParseError(
                f"Expected _links to be a JSON object, got {type(data).__name__}"
            )
        links: List[Link] = []
        array_rels: List[str] = []
        for rel, value in data.items():
            if isinstance(value, list):
                array_rels.append(rel)
                links.extend(Link.from_dict(rel, entry) for entry in value)
            else:
                links.append(Link.from_dict(rel, value))
        return cls(links, array_rels=array_rels, curies=curies)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Links):
            return NotImplemented
        return self._links == other._links

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Links({self._links!r})"


class LinksBuilder:
    def __init__(self, curies: Optional[Curies] = None) -> None:
        self._links: List[Link] = []
        self._array_rels: List[str] = []
        self._curies = curies if curies is not None else Curies.empty()

    @classmethod
    def copy_of(cls, links: Optional[Links]) -> "LinksBuilder":
        """Builder seeded with the links, array flags and inherited CURIes of ``links``."""
        if links is None:
            return cls()
        return cls(links._inherited).with_links(links)

    def single(self, *links: Link) -> "LinksBuilder":
        self._links.extend(links)
        return self

    def array(self, *links: Link) -> "LinksBuilder":
        """Add links whose relations always render as JSON arrays."""
        self._links.extend(links)
        self._array_rels.extend(link.rel for link in links)
        return self

    def with_links(self, links: Union[Links, Iterable[Link]]) -> "LinksBuilder":
        if isinstance(links, Links):
            self._array_rels.extend(links._declared_array_rels)
        self._links.extend(links)
        return self

    def curi(self, name: str, rel_template: str) -> "LinksBuilder":
        self._links.append(curi(name, rel_template))
        return self

    def with_array_rels(self, *rels: str) -> "LinksBuilder":
        self._array_rels.extend(rels)
        return self

    def without(self, rel: str, curies: Optional[Curies] = None) -> "LinksBuilder":
        """
        Drop every link of ``rel`` (curied or expanded). Relations are matched
        through ``curies`` (default: the CURIes the builder was seeded with)
        plus the ``curies`` links added to the builder.
        """
        scope = curies if curies is not None else self._curies
        curies = scope.merge_with(
            Curies(link for link in self._links if link.rel == CURIES_REL)
        )
        resolved = curies.resolve(rel)
        self._links = [
            link for link in self._links if curies.resolve(link.rel) != resolved
        ]
        return self

    def replace(self, rel: str, links: Iterable[Link]) -> "LinksBuilder":
        return self.without(rel).single(*links)

    def build(self, curies: Optional[Curies] = None) -> Links:
        return Links(
            self._links,
            array_rels=self._array_rels,
            curies=curies if curies is not None else self._curies,
        )


def _put_curi(bucket: List[Link], curi_link: Link) -> None:
    # one entry per prefix name; a later declaration replaces an earlier one
    for index, existing in enumerate(bucket):
        if existing.name == curi_link.name:
            bucket[index] = curi_link
            return
    bucket.append(curi_link)


def empty_links() -> Links:
    return Links.empty()


def linking_to(*links: Link) -> Links:
    return Links(links)


def links_builder() -> LinksBuilder:
    return LinksBuilder()


__all__ = ["Links", "LinksBuilder", "empty_links", "linking_to", "links_builder"]
