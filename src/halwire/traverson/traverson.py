"""
Traverson: follow link-relation types from resource to resource.

    traverson = Traverson(httpx_link_resolver())
    product = (
        traverson.start_with("http://example.com/api")
        .follow("search", {"q": "tea"})
        .follow("item")
        .get_resource_as(Product)
    )

Each hop takes the embedded item of the relation when the current resource
embeds one, and otherwise fetches the first matching link through the link
resolver. A hop without a matching link or item ends the traversal with an
empty result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Type, TypeVar, Union
from urllib.parse import urljoin, urlsplit

from ..core.errors import HalError, TraversionError
from ..core.link import Link, LinkPredicate, self_link, with_href
from ..core.parser import EmbeddedTypeInfo, HalParser, with_embedded
from ..core.representation import HalRepresentation
from ..core.uri_templates import expand

logger = logging.getLogger("halwire.traverson")

R = TypeVar("R", bound=HalRepresentation)

LinkResolver = Callable[[Link], str]
PageHandler = Callable[["Traverson"], bool]


@dataclass(frozen=True)
class _Hop:
    rel: str
    predicate: Optional[LinkPredicate]
    vars: Mapping[str, Any]
    ignore_embedded: bool


def embedded_type_info_for(
    rels: Sequence[str],
    result_type: Type[HalRepresentation],
    embedded_type_infos: Sequence[EmbeddedTypeInfo] = (),
) -> EmbeddedTypeInfo:
    """
    Type info that parses the items reached by ``rels`` (nested embedding)
    as ``result_type`` with ``embedded_type_infos`` below them.
    """
    if not rels:
        raise TraversionError("Hops must not be empty")
    type_info = with_embedded(rels[-1], result_type, *embedded_type_infos)
    for rel in reversed(rels[:-1]):
        type_info = with_embedded(rel, HalRepresentation, type_info)
    return type_info


class Traverson:
    def __init__(self, link_resolver: LinkResolver):
        self._link_resolver = link_resolver
        self._start_with: Optional[str] = None
        self._context_url: Optional[str] = None
        self._hops: List[_Hop] = []
        self._last_result: Optional[List[HalRepresentation]] = None

    @property
    def current_context_url(self) -> Optional[str]:
        return self._context_url

    # --- Start ------------------------------------------------------------- #

    def start_with(
        self, uri_template: str, vars: Optional[Mapping[str, Any]] = None
    ) -> "Traverson":
        uri = expand(uri_template, vars)
        if not urlsplit(uri).scheme:
            raise TraversionError(f"Start URI must be absolute, got {uri!r}")
        self._start_with = uri
        self._context_url = uri
        self._hops = []
        self._last_result = None
        return self

    def start_with_resource(
        self, resource: HalRepresentation, context_url: Optional[str] = None
    ) -> "Traverson":
        if context_url is None:
            own = resource.links.get_link_by("self")
            if own is not None and urlsplit(own.href).scheme:
                context_url = own.href
            elif any(not urlsplit(l.href).scheme for l in resource.links):
                raise TraversionError(
                    "Unable to start from a resource without absolute self link "
                    "but containing relative links; pass a context_url"
                )
        self._start_with = None
        self._context_url = context_url
        self._hops = []
        self._last_result = [resource]
        return self

    # --- Hops -------------------------------------------------------------- #

    def follow(
        self,
        rels: Union[str, Sequence[str]],
        vars: Optional[Mapping[str, Any]] = None,
        predicate: Optional[LinkPredicate] = None,
    ) -> "Traverson":
        return self._add_hops(rels, vars, predicate, ignore_embedded=False)

    def follow_link(
        self,
        rels: Union[str, Sequence[str]],
        vars: Optional[Mapping[str, Any]] = None,
        predicate: Optional[LinkPredicate] = None,
    ) -> "Traverson":
        """Like ``follow``, but fetches linked resources even when they are embedded."""
        return self._add_hops(rels, vars, predicate, ignore_embedded=True)

    def _add_hops(
        self,
        rels: Union[str, Sequence[str]],
        vars: Optional[Mapping[str, Any]],
        predicate: Optional[LinkPredicate],
        *,
        ignore_embedded: bool,
    ) -> "Traverson":
        self._check_state()
        for rel in [rels] if isinstance(rels, str) else rels:
            self._hops.append(_Hop(rel, predicate, dict(vars or {}), ignore_embedded))
        return self

    # --- Results ----------------------------------------------------------- #

    def get_resource(self) -> Optional[HalRepresentation]:
        return self.get_resource_as(HalRepresentation)

    def get_resource_as(
        self, type_: Type[R], *embedded_type_infos: EmbeddedTypeInfo
    ) -> Optional[R]:
        results = self._traverse(type_, embedded_type_infos, retrieve_all=False)
        return results[0] if results else None

    def stream(self) -> List[HalRepresentation]:
        return self.stream_as(HalRepresentation)

    def stream_as(
        self, type_: Type[R], *embedded_type_infos: EmbeddedTypeInfo
    ) -> List[R]:
        """All resources the last hop links to (or embeds), each parsed as ``type_``."""
        return self._traverse(type_, embedded_type_infos, retrieve_all=True)

    # --- Pagination -------------------------------------------------------- #

    def paginate_next(
        self,
        handler: PageHandler,
        page_type: Type[HalRepresentation] = HalRepresentation,
        *embedded_type_infos: EmbeddedTypeInfo,
    ) -> None:
        self.paginate("next", handler, page_type, *embedded_type_infos)

    def paginate_prev(
        self,
        handler: PageHandler,
        page_type: Type[HalRepresentation] = HalRepresentation,
        *embedded_type_infos: EmbeddedTypeInfo,
    ) -> None:
        self.paginate("prev", handler, page_type, *embedded_type_infos)

    def paginate(
        self,
        rel: str,
        handler: PageHandler,
        page_type: Type[HalRepresentation] = HalRepresentation,
        *embedded_type_infos: EmbeddedTypeInfo,
    ) -> None:
        """
        Walk pages by following ``rel``. The handler gets a Traverson started
        with each page; it stops the walk by returning False.
        """
        page = self.get_resource_as(page_type, *embedded_type_infos)
        while (
            page is not None
            and handler(
                Traverson(self._link_resolver).start_with_resource(page, self._context_url)
            )
            and page.links.has_link(rel)
        ):
            page = self.follow(rel).get_resource_as(page_type, *embedded_type_infos)

    # --- Internals --------------------------------------------------------- #

    def _check_state(self) -> None:
        if self._start_with is None and self._last_result is None:
            msg = "Please call start_with(uri) first."
            logger.error(msg)
            raise TraversionError(msg)

    def _traverse(
        self,
        type_: Type[R],
        infos: Sequence[EmbeddedTypeInfo],
        *,
        retrieve_all: bool,
    ) -> List[R]:
        self._check_state()
        last_result = self._last_result or []
        if self._start_with is not None:
            results = self._traverse_initial(self._start_with, type_, infos, retrieve_all)
        elif not self._hops:
            results = [self._as_type(r, type_, infos) for r in last_result]
        elif not last_result:
            self._hops = []
            results = []
        else:
            results = self._traverse_hop(last_result[0], type_, infos, retrieve_all)
        self._last_result = list(results)
        return results

    def _traverse_initial(
        self,
        start_with: str,
        type_: Type[R],
        infos: Sequence[EmbeddedTypeInfo],
        retrieve_all: bool,
    ) -> List[R]:
        initial = self_link(start_with)
        logger.debug("Starting traversal", extra={"href": initial.href})
        self._start_with = None
        if not self._hops:
            return [self._get_resource(initial, type_, infos)]
        # parse the start resource with the hop relations typed, in case it embeds them
        type_info = embedded_type_info_for([h.rel for h in self._hops], type_, infos)
        first = self._get_resource(initial, HalRepresentation, (type_info,))
        return self._traverse_hop(first, type_, infos, retrieve_all)

    def _traverse_hop(
        self,
        current: HalRepresentation,
        type_: Type[R],
        infos: Sequence[EmbeddedTypeInfo],
        retrieve_all: bool,
    ) -> List[Any]:
        hop = self._hops.pop(0)
        logger.debug("Following hop", extra={"rel": hop.rel, "hops": len(self._hops)})
        links = current.links.get_links_by(hop.rel, hop.predicate)

        if not hop.ignore_embedded or not links:
            items = current.embedded.get_items_by(hop.rel)
            if items:
                logger.debug("Using embedded items", extra={"rel": hop.rel})
                if not self._hops:
                    return [self._as_type(i, type_, infos) for i in items]
                return self._traverse_hop(items[0], type_, infos, retrieve_all)

        if not links:
            logger.error(
                "Can not follow hop: no matching links found",
                extra={"rel": hop.rel, "url": self._context_url},
            )
            self._hops = []
            return []

        target = self._resolve(self._expand(links[0], hop.vars))
        if not self._hops:
            if retrieve_all:
                return [
                    self._get_resource(self._resolve(self._expand(l, hop.vars)), type_, infos)
                    for l in links
                ]
            self._context_url = target.href
            return [self._get_resource(target, type_, infos)]

        self._context_url = target.href
        type_info = embedded_type_info_for([h.rel for h in self._hops], type_, infos)
        resource = self._get_resource(target, HalRepresentation, (type_info,))
        return self._traverse_hop(resource, type_, infos, retrieve_all)

    @staticmethod
    def _expand(link: Link, vars: Mapping[str, Any]) -> Link:
        if not link.templated:
            return link
        return with_href(link, expand(link.href, vars))

    def _resolve(self, link: Link) -> Link:
        if link.templated:
            msg = f"Link must not be templated: {link.href}"
            logger.error(msg)
            raise TraversionError(msg)
        href = urljoin(self._context_url, link.href) if self._context_url else link.href
        if not urlsplit(href).scheme:
            msg = f"Unable to resolve relative href {link.href!r} without a context URL"
            logger.error(msg)
            raise TraversionError(msg)
        return with_href(link, href) if href != link.href else link

    @staticmethod
    def _as_type(
        resource: HalRepresentation, type_: Type[R], infos: Sequence[EmbeddedTypeInfo]
    ) -> R:
        if isinstance(resource, type_) and not infos:
            return resource
        return HalParser(resource.to_dict()).as_type(
            type_, *infos, curies=resource.inherited_curies
        )

    def _get_resource(
        self, link: Link, type_: Type[R], infos: Sequence[EmbeddedTypeInfo]
    ) -> R:
        logger.debug(
            "Fetching resource",
            extra={"rel": link.rel, "href": link.href, "type": type_.__name__},
        )
        try:
            text = self._link_resolver(link)
        except Exception:
            logger.error("Failed to fetch resource", extra={"rel": link.rel, "href": link.href})
            raise
        try:
            return HalParser.parse(text).as_type(type_, *infos)
        except HalError:
            logger.error(
                "Failed to parse resource",
                extra={"rel": link.rel, "href": link.href, "type": type_.__name__},
            )
            raise


def traverson(link_resolver: LinkResolver) -> Traverson:
    return Traverson(link_resolver)


__all__ = [
    "LinkResolver",
    "PageHandler",
    "Traverson",
    "embedded_type_info_for",
    "traverson",
]
