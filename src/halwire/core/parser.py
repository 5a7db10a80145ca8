from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple, Type, TypeVar, Union

from .curies import Curies
from .embedded import Embedded
from .errors import HalParseError, HalValueError
from .links import Links
from .representation import RESERVED_KEYS, HalRepresentation

logger = logging.getLogger("halwire.core.parser")

R = TypeVar("R", bound=HalRepresentation)


@dataclass(frozen=True)
class EmbeddedTypeInfo:
    """
    Representation type for the items of one embedded relation.

    ``rel`` may be curied or expanded; it is matched against the wire keys
    through the CURIes in scope where the relation appears. ``nested`` applies
    to the ``_embedded`` of those items.
    """

    rel: str
    type: Type[HalRepresentation]
    nested: Tuple["EmbeddedTypeInfo", ...] = ()


def with_embedded(
    rel: str, type_: Type[HalRepresentation], *nested: EmbeddedTypeInfo
) -> EmbeddedTypeInfo:
    return EmbeddedTypeInfo(rel, type_, tuple(nested))


class HalParser:
    """
    Turns a decoded application/hal+json document into a representation tree.

        HalParser.parse(text).as_type(Order, with_embedded("item", LineItem))
    """

    def __init__(self, document: Dict[str, Any]):
        if not isinstance(document, dict):
            raise HalParseError(
                f"HAL document must be a JSON object, got {type(document).__name__}"
            )
        self._document = document

    @classmethod
    def parse(cls, text: Union[str, bytes]) -> "HalParser":
        try:
            document = json.loads(text)
        except ValueError as exc:
            raise HalParseError(f"Invalid JSON document: {exc}") from exc
        return cls(document)

    @property
    def document(self) -> Dict[str, Any]:
        return self._document

    def as_type(
        self,
        type_: Type[R] = HalRepresentation,  # type: ignore[assignment]
        *embedded_type_infos: EmbeddedTypeInfo,
        curies: Optional[Curies] = None,
    ) -> R:
        """
        Build the representation tree. ``curies`` is the scope of the enclosing
        document when the document was embedded somewhere.
        """
        inherited = curies if curies is not None else Curies.empty()
        result = _decode(self._document, type_, embedded_type_infos, inherited)
        if not inherited.is_empty():
            result.merge_with_embedding(inherited)
        logger.debug(
            "Parsed HAL document",
            extra={"type": type_.__name__, "rels": result.links.get_rels()},
        )
        return result


def _type_info_for(
    rel: str, infos: Sequence[EmbeddedTypeInfo], curies: Curies
) -> Optional[EmbeddedTypeInfo]:
    resolved = curies.resolve(rel)
    for info in infos:
        if info.rel == rel or curies.resolve(info.rel) == resolved:
            return info
    return None


def _decode(
    document: Any,
    type_: Type[R],
    infos: Sequence[EmbeddedTypeInfo],
    inherited: Curies,
) -> R:
    if not isinstance(document, dict):
        raise HalParseError(
            f"Embedded item must be a JSON object, got {type(document).__name__}"
        )
    try:
        links = Links.from_dict(document.get("_links", {}))
    except HalValueError as exc:
        raise HalParseError(f"Invalid link in _links: {exc}") from exc
    scope = inherited.merge_with(links.curies)

    embedded_data = document.get("_embedded", {})
    if not isinstance(embedded_data, dict):
        raise HalParseError(
            f"Expected _embedded to be a JSON object, got {type(embedded_data).__name__}"
        )
    items: Dict[str, Any] = {}
    for rel, value in embedded_data.items():
        info = _type_info_for(rel, infos, scope)
        item_type = info.type if info is not None else HalRepresentation
        nested = info.nested if info is not None else ()
        if isinstance(value, list):
            items[rel] = [_decode(v, item_type, nested, scope) for v in value]
        else:
            items[rel] = _decode(value, item_type, nested, scope)

    attributes = {k: v for k, v in document.items() if k not in RESERVED_KEYS}
    return type_.from_hal(links, Embedded(items), attributes)  # type: ignore[return-value]


def parse(text: Union[str, bytes]) -> HalParser:
    return HalParser.parse(text)


__all__ = ["EmbeddedTypeInfo", "HalParser", "parse", "with_embedded"]
