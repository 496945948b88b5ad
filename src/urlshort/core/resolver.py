"""Request path resolution.

Maps an exact request path to a redirect destination, delegating every other
request to a fallback handler. Exactly one of the two branches runs per request.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping

from aiohttp import web

from urlshort.core.types import Destination, PathMapping, URLPath, freeze_mapping

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

REDIRECT_STATUSES: dict[int, type[web.HTTPMove]] = {
    301: web.HTTPMovedPermanently,
    302: web.HTTPFound,
    303: web.HTTPSeeOther,
    307: web.HTTPTemporaryRedirect,
    308: web.HTTPPermanentRedirect,
}


class InvalidConstructionError(TypeError):
    """Resolver built with arguments that violate its preconditions."""


class PathResolver:
    """aiohttp handler that redirects mapped paths and delegates the rest.

    The mapping is copied into a read-only view on construction, so concurrent
    requests only ever read it.
    """

    def __init__(
        self,
        mapping: Mapping[str, str],
        fallback: Handler,
        *,
        redirect_status: int = 302,
    ) -> None:
        """Initialize resolver.

        Args:
            mapping: Path to destination pairs; paths are assumed unique
            fallback: Handler invoked for paths missing from the mapping
            redirect_status: Redirection status code used on a match

        Raises:
            InvalidConstructionError: If fallback is missing or not callable,
                redirect_status is not a redirection code, or an entry has an
                empty path or destination
        """
        if not callable(fallback):
            raise InvalidConstructionError("fallback handler is required")
        if redirect_status not in REDIRECT_STATUSES:
            supported = ", ".join(str(code) for code in REDIRECT_STATUSES)
            raise InvalidConstructionError(
                f"Unsupported redirect status {redirect_status!r} (expected one of {supported})",
            )
        for path, destination in mapping.items():
            if not path or not destination:
                raise InvalidConstructionError(
                    f"Redirect entries need a path and a destination, got {path!r} -> {destination!r}",
                )

        self._mapping = freeze_mapping(mapping)
        self._fallback = fallback
        self._redirect = REDIRECT_STATUSES[redirect_status]

    @property
    def mapping(self) -> PathMapping:
        return self._mapping

    @property
    def fallback(self) -> Handler:
        return self._fallback

    @property
    def redirect_status(self) -> int:
        return self._redirect.status_code

    def resolve(self, path: str) -> Destination | None:
        """Look up the destination for an exact path, or None."""
        return self._mapping.get(URLPath(path))

    async def handle(self, request: web.Request) -> web.StreamResponse:
        """Redirect a mapped path or delegate the request to the fallback."""
        path = request.path
        destination = self.resolve(path)
        if destination is None:
            logger.debug(f"No redirect for {path}, delegating to fallback")
            return await self._fallback(request)

        logger.debug(f"Redirecting {path} -> {destination} ({self.redirect_status})")
        raise self._redirect(location=destination)

    __call__ = handle


def map_handler(
    mapping: Mapping[str, str],
    fallback: Handler,
    *,
    redirect_status: int = 302,
) -> PathResolver:
    """Build a resolver for a path to URL mapping.

    Args:
        mapping: Path to destination pairs
        fallback: Handler for paths that are not in the mapping
        redirect_status: Redirection status code used on a match

    Returns:
        Request handler suitable for registration with an aiohttp router
    """
    return PathResolver(mapping, fallback, redirect_status=redirect_status)
