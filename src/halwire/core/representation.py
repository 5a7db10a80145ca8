"""
HAL representation: links, embedded representations and domain attributes.

Every representation carries a CURI scope. Its own ``curies`` links are
merged over the scope inherited from the enclosing document, so a child's
declaration of a prefix beats an ancestor's declaration of the same prefix.
The merged scope is handed down to the embedded items whenever the
representation (re)derives its CURIes.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from .curies import Curies
from .embedded import Embedded, EmbeddedBuilder, EmbeddedValue
from .errors import HalModelValidationError
from .link import CURIES_REL, Link
from .links import Links

M = TypeVar("M", bound=BaseModel)

RESERVED_KEYS = frozenset({"_links", "_embedded"})


class HalRepresentation:
    def __init__(
        self,
        links: Optional[Links] = None,
        embedded: Optional[Embedded] = None,
        curies: Optional[Curies] = None,
        attributes: Optional[Dict[str, Any]] = None,
    ):
        # links as declared; `_links` is the view derived for the current scope
        self._own_links = links if links is not None else Links.empty()
        self._links = self._own_links
        self._embedded = embedded if embedded is not None else Embedded.empty()
        # CURIes of the enclosing documents; never rendered here.
        self._inherited = curies if curies is not None else Curies.empty()
        self._attributes: Dict[str, Any] = {
            k: v for k, v in (attributes or {}).items() if k not in RESERVED_KEYS
        }
        self._apply_curies()

    # --- Typed binding hooks ------------------------------------------------ #

    @classmethod
    def from_hal(
        cls,
        links: Links,
        embedded: Embedded,
        attributes: Dict[str, Any],
        curies: Optional[Curies] = None,
    ) -> "HalRepresentation":
        """
        Build an instance from a decoded document. Subclasses binding domain
        fields override this together with ``to_attributes``.
        """
        return cls(links=links, embedded=embedded, curies=curies, attributes=attributes)

    def to_attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    # --- CURIes -------------------------------------------------------------- #

    def _apply_curies(self) -> None:
        own = self._own_links
        declared = own.get_links_by(CURIES_REL)
        if any(c in self._inherited for c in declared):
            own = (
                Links.copy_of(own)
                .without(CURIES_REL)
                .single(*[c for c in declared if c not in self._inherited])
                .build()
            )
        self._links = own.using(self._inherited)
        self._curies = self._links.curies
        self._embedded = self._embedded.using(self._curies)
        for item in self._embedded:
            item.merge_with_embedding(self._curies)

    def merge_with_embedding(self, parent_curies: Curies) -> "HalRepresentation":
        """
        Attach this representation below a document whose CURI scope is
        ``parent_curies``. Local CURIes already declared identically by the
        parent scope are dropped from the rendered links; they stay resolvable.
        The declared links are kept, so attaching the representation elsewhere
        later renders them again. Recurses into the embedded items.
        """
        self._inherited = parent_curies
        self._apply_curies()
        return self

    # --- Mutation after construction ---------------------------------------- #

    def with_links(self, links: Union[Links, Iterable[Link], Link]) -> "HalRepresentation":
        builder = Links.copy_of(self._own_links)
        if isinstance(links, Link):
            builder.single(links)
        else:
            builder.with_links(links)
        self._own_links = builder.build()
        self._apply_curies()
        return self

    def with_embedded(self, rel: str, value: EmbeddedValue) -> "HalRepresentation":
        builder: EmbeddedBuilder = Embedded.copy_of(self._embedded)
        self._embedded = builder.with_embedded(rel, value).build()
        self._apply_curies()
        return self

    # --- Accessors ----------------------------------------------------------- #

    @property
    def links(self) -> Links:
        return self._links

    @property
    def embedded(self) -> Embedded:
        return self._embedded

    @property
    def curies(self) -> Curies:
        return self._curies

    @property
    def inherited_curies(self) -> Curies:
        """CURIes of the enclosing documents."""
        return self._inherited

    @property
    def attributes(self) -> Dict[str, Any]:
        return dict(self._attributes)

    def get_attribute(self, name: str, default: Any = None) -> Any:
        return self._attributes.get(name, default)

    def attributes_as(self, model: Type[M]) -> M:
        try:
            return model.model_validate(self.to_attributes())
        except ValidationError as exc:
            raise HalModelValidationError(
                f"Attributes did not match model {model.__name__}: {exc}"
            ) from exc

    # --- Wire format -------------------------------------------------------- #

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if not self._links.is_empty():
            data["_links"] = self._links.to_dict()
        if not self._embedded.is_empty():
            data["_embedded"] = self._embedded.to_dict()
        for key, value in self.to_attributes().items():
            if key not in RESERVED_KEYS:
                data[key] = value
        return data

    def to_json(self, indent: Optional[int] = None) -> str:
        if indent is None:
            return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HalRepresentation):
            return NotImplemented
        return (
            type(self) is type(other)
            and self._links == other._links
            and self._embedded == other._embedded
            and self.to_attributes() == other.to_attributes()
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(links={self._links!r}, "
            f"embedded={self._embedded!r}, attributes={self.to_attributes()!r})"
        )


__all__ = ["HalRepresentation", "RESERVED_KEYS"]
