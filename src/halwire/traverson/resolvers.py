import logging
import time
from typing import Optional

import httpx

from ..core.errors import HalError
from ..core.link import Link
from ..core.observability import log_event
from .config import ResolverConfig, load_env_config


class LinkResolutionError(HalError):
    def __init__(self, message: str, *, url: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class HttpxLinkResolver:
    """
    Link resolver for the Traverson backed by a synchronous ``httpx.Client``.
    - GETs the link href, asking for the link's media type or HAL+JSON
    - Retries network errors, timeouts and transient statuses (502/503/504)
    - Raises LinkResolutionError on non-2xx responses and exhausted retries
    - Returns the response body as text
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        config: Optional[ResolverConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.config = config if config is not None else ResolverConfig()
        self.log = logger or logging.getLogger("halwire.traverson.resolvers")
        self._owns_http = client is None
        self.http = client or httpx.Client(
            timeout=self.config.timeout_seconds, follow_redirects=True
        )

    @classmethod
    def from_env(cls, **kwargs) -> "HttpxLinkResolver":
        return cls(config=load_env_config(), **kwargs)

    def close(self) -> None:
        if self._owns_http:
            self.http.close()

    def __enter__(self) -> "HttpxLinkResolver":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __call__(self, link: Link) -> str:
        cfg = self.config
        headers = {"Accept": link.type or cfg.accept}
        start = time.perf_counter()
        attempt = 0

        while True:
            try:
                resp = self.http.get(link.href, headers=headers)
            except (httpx.ConnectError, httpx.ReadTimeout, httpx.ConnectTimeout) as exc:
                if attempt < cfg.max_retries:
                    time.sleep(cfg.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                raise LinkResolutionError(
                    f"Network/timeout error fetching {link.href}: {exc}", url=link.href
                ) from exc
            except httpx.HTTPError as exc:
                raise LinkResolutionError(
                    f"HTTPX error fetching {link.href}: {exc}", url=link.href
                ) from exc

            log_event(
                "link_resolved",
                rel=link.rel,
                href=link.href,
                status=resp.status_code,
                duration_ms=int((time.perf_counter() - start) * 1000),
                attempt=attempt,
            )

            if resp.status_code in cfg.retry_statuses or (
                cfg.retry_on_429 and resp.status_code == 429
            ):
                if attempt < cfg.max_retries:
                    time.sleep(cfg.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue

            if resp.status_code < 200 or resp.status_code >= 300:
                url = str(resp.request.url)
                raise LinkResolutionError(
                    f"{resp.status_code} GET {url}: request failed",
                    url=url,
                    status_code=resp.status_code,
                )
            return resp.text


def httpx_link_resolver(
    client: Optional[httpx.Client] = None, config: Optional[ResolverConfig] = None
) -> HttpxLinkResolver:
    return HttpxLinkResolver(client=client, config=config)


__all__ = ["LinkResolutionError", "HttpxLinkResolver", "httpx_link_resolver"]
