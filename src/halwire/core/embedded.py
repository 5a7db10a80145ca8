from __future__ import annotations

from typing import (
    TYPE_CHECKING,
    Any,
    Dict,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Set,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from .curies import Curies

if TYPE_CHECKING:
    from .representation import HalRepresentation

T = TypeVar("T")

EmbeddedValue = Union["HalRepresentation", Sequence["HalRepresentation"]]


class Embedded:
    """
    The ``_embedded`` object: relation -> one or more nested representations.

    Lookup follows the same CURI rules as Links. Items are never
    de-duplicated. A relation given as a list renders as a JSON array, even
    with one element; a relation given as a single item renders as an object.
    """

    def __init__(
        self,
        items: Optional[Mapping[str, EmbeddedValue]] = None,
        *,
        curies: Optional[Curies] = None,
    ):
        self._raw: Dict[str, EmbeddedValue] = dict(items or {})
        self._curies = curies if curies is not None else Curies.empty()
        self._items: Dict[str, List[Any]] = {}
        self._array_rels: Set[str] = set()
        for rel, value in self._raw.items():
            key = self._curies.resolve(rel)
            bucket = self._items.setdefault(key, [])
            if isinstance(value, (list, tuple)):
                bucket.extend(value)
                self._array_rels.add(key)
            else:
                bucket.append(value)
            if len(bucket) > 1:
                self._array_rels.add(key)

    @classmethod
    def empty(cls) -> "Embedded":
        return cls()

    @classmethod
    def builder(cls) -> "EmbeddedBuilder":
        return EmbeddedBuilder()

    @classmethod
    def copy_of(cls, embedded: Optional["Embedded"]) -> "EmbeddedBuilder":
        if embedded is None:
            return EmbeddedBuilder()
        builder = EmbeddedBuilder(curies=embedded._curies)
        builder._items.update(embedded._raw)
        return builder

    @property
    def curies(self) -> Curies:
        return self._curies

    def get_rels(self) -> List[str]:
        return list(self._items)

    def _bucket(self, rel: str) -> List[Any]:
        bucket = self._items.get(rel)
        if bucket is None:
            bucket = self._items.get(self._curies.resolve(rel), [])
        return bucket

    def get_items_by(self, rel: str, as_type: Optional[Type[T]] = None) -> List[Any]:
        items = list(self._bucket(rel))
        if as_type is not None:
            for value in items:
                if not isinstance(value, as_type):
                    raise TypeError(
                        f"Embedded item for rel {rel!r} is a {type(value).__name__}, "
                        f"not a {as_type.__name__}"
                    )
        return items

    def get_item_by(self, rel: str) -> Optional[Any]:
        items = self._bucket(rel)
        return items[0] if items else None

    def has_item(self, rel: str) -> bool:
        return bool(self._bucket(rel))

    def is_array(self, rel: str) -> bool:
        return rel in self._array_rels or self._curies.resolve(rel) in self._array_rels

    def is_empty(self) -> bool:
        return not self._items

    def items(self) -> Iterator[Tuple[str, List[Any]]]:
        for rel, bucket in self._items.items():
            yield rel, list(bucket)

    def __iter__(self) -> Iterator[Any]:
        for bucket in self._items.values():
            yield from bucket

    def using(self, curies: Curies) -> "Embedded":
        """Same items, re-keyed against ``curies``."""
        return Embedded(self._raw, curies=curies)

    def to_dict(self) -> Dict[str, Any]:
        rendered: Dict[str, Any] = {}
        for rel, bucket in self._items.items():
            if rel in self._array_rels:
                rendered[rel] = [value.to_dict() for value in bucket]
            else:
                rendered[rel] = bucket[0].to_dict()
        return rendered

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Embedded):
            return NotImplemented
        return self._items == other._items

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Embedded({self._items!r})"


class EmbeddedBuilder:
    def __init__(self, curies: Optional[Curies] = None) -> None:
        self._items: Dict[str, EmbeddedValue] = {}
        self._curies = curies if curies is not None else Curies.empty()

    def with_embedded(self, rel: str, value: EmbeddedValue) -> "EmbeddedBuilder":
        """
        Set the item (or list of items) for rel. A later call for the same
        relation overwrites, whether it is given curied or expanded.
        """
        self.without(rel)
        self._items[rel] = list(value) if isinstance(value, (list, tuple)) else value
        return self

    def without(self, rel: str) -> "EmbeddedBuilder":
        resolved = self._curies.resolve(rel)
        for key in [k for k in self._items if self._curies.resolve(k) == resolved]:
            del self._items[key]
        return self

    def build(self, curies: Optional[Curies] = None) -> Embedded:
        return Embedded(self._items, curies=curies if curies is not None else self._curies)


def empty_embedded() -> Embedded:
    return Embedded.empty()


def embedded(rel: str, value: EmbeddedValue) -> Embedded:
    return Embedded({rel: value})


def embedded_builder() -> EmbeddedBuilder:
    return EmbeddedBuilder()


__all__ = [
    "Embedded",
    "EmbeddedBuilder",
    "EmbeddedValue",
    "empty_embedded",
    "embedded",
    "embedded_builder",
]
