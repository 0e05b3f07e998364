"""First-match-wins router.

One Router serves one request lifecycle. Routes are registered in
priority order, each registration call doubling as a match attempt
against the request it is given. The first route that matches becomes
the active result; every later registration still records its name for
reverse lookup but is not evaluated.

Usage::

    router = Router("/blog")
    request = Request.from_uri("GET", "/blog/posts/42")

    router.match(request, "/", "home#index", via="get", name="home")
    router.resources(request, "posts")
    router.match(request, "/:controller/:action/:id")

    if router.has_route():
        route = router.get_route()   # MatchResult(controller="posts", action="show", ...)
"""

import logging
import re
from collections.abc import Iterable, Mapping

from signpost._internal.options import split_options
from signpost.config import RouterConfig
from signpost.errors import MethodNotAllowed, NotFound
from signpost.http.request import Request
from signpost.routing.pattern import SEPARATOR, parse_pattern
from signpost.routing.resources import expand_resource
from signpost.routing.route import (
    MatchResult,
    Resolved,
    Route,
    RouterState,
    Searching,
    Target,
)

logger = logging.getLogger("signpost.routing")


class Router:
    """Ordered route registry with matching and reverse resolution."""

    __slots__ = ("_base_path", "_config", "_named", "_rejected", "_routes", "_state")

    def __init__(self, base_path: str | None = None, config: RouterConfig | None = None) -> None:
        self._config = config or RouterConfig()
        self._base_path = _normalize_base(
            self._config.base_path if base_path is None else base_path
        )
        self._routes: list[Route] = []
        self._named: dict[str, Route] = {}
        self._state: RouterState = Searching()
        # Methods of routes whose path matched but whose method did not
        self._rejected: set[str] = set()

    # -- Configuration --

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def base_path(self) -> str:
        """Prefix prepended to every pattern at match time."""
        return self._base_path

    @base_path.setter
    def base_path(self, value: str) -> None:
        self._base_path = _normalize_base(value)

    # -- Registry --

    def add(self, route: Route) -> None:
        """Record *route* in the registry and, if named, the name table.

        Naming is unconditional: it happens whether or not the route is
        ever evaluated or matches. A later route with the same name
        replaces the earlier one.
        """
        self._compile(route)
        self._routes.append(route)
        if route.name is not None:
            if route.name in self._named:
                logger.debug("Route name %r re-registered for %s", route.name, route.path)
            self._named[route.name] = route

    @property
    def routes(self) -> list[Route]:
        """All registered routes, in registration order."""
        return list(self._routes)

    @property
    def named_routes(self) -> dict[str, str]:
        """Route name -> registered pattern string."""
        return {name: route.path for name, route in self._named.items()}

    # -- Matching --

    def match(
        self,
        request: Request,
        pattern: str,
        target: str | None = None,
        *,
        via: str | Iterable[str] | None = None,
        name: str | None = None,
        filters: Mapping[str, str] | None = None,
    ) -> bool:
        """Register a route and try it against *request*.

        Args:
            request: The request being routed.
            pattern: Path pattern starting with ``/``; ``:name`` marks a
                placeholder.
            target: ``"controller#action"``. When omitted, controller and
                action are taken from the first two path segments after the
                base path.
            via: Accepted methods, as ``"get,post"`` or an iterable.
                Omitted means any method.
            name: Name to record for ``reverse()``.
            filters: Placeholder name -> constraint expression.

        Returns:
            True if this call produced the router's match. False if the
            method or path did not match, or if an earlier call already
            matched.

        Raises:
            InvalidPattern: If *pattern* or one of its filters is malformed.
        """
        route = Route(
            pattern=parse_pattern(pattern, filters),
            methods=frozenset(split_options(via, upper=True)),
            name=name,
            target=Target.parse(target) if target else None,
        )
        self.add(route)

        if isinstance(self._state, Resolved):
            return False
        return self._evaluate(route, request)

    def resources(
        self,
        request: Request,
        controller: str,
        *,
        only: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
    ) -> None:
        """Register the seven conventional CRUD routes for *controller*.

        See ``signpost.routing.resources`` for the table. Each route goes
        through ``match()``, so short-circuiting and naming behave exactly
        as for individual registrations.
        """
        for entry in expand_resource(controller, only=only, exclude=exclude):
            self.match(request, entry.pattern, entry.target, via=entry.via, name=entry.name)

    def _evaluate(self, route: Route, request: Request) -> bool:
        config = self._config
        path = request.path.rstrip(SEPARATOR)
        regex = self._compile(route)

        method = request.effective_method(
            config.method_override_field, config.overridable_methods
        )
        if not route.accepts(method):
            # Path is still checked so resolve() can report 405 over 404
            if regex.fullmatch(path):
                self._rejected.update(route.methods)
            return False

        found = regex.fullmatch(path)
        if found is None:
            return False

        result = self._build_result(route, route.pattern.extract(found), path)
        self._state = Resolved(result)
        if method != request.method.upper():
            logger.debug("Method override %s -> %s for %s", request.method, method, request.path)
        logger.debug(
            "Matched %s %s to %s#%s via %s",
            method,
            request.path,
            result.controller,
            result.action,
            route.path,
        )
        return True

    def _build_result(self, route: Route, params: dict[str, str], path: str) -> MatchResult:
        # Placeholder-derived controller/action win over the target
        controller = params.pop("controller", None)
        action = params.pop("action", None)

        if route.target is not None:
            fallback_controller = route.target.controller
            fallback_action = route.target.action
        else:
            segments = self._strip_base(path).lstrip(SEPARATOR).split(SEPARATOR)
            fallback_controller = segments[0]
            fallback_action = segments[1] if len(segments) > 1 else None

        if controller is None:
            controller = fallback_controller
        if action is None:
            action = fallback_action if fallback_action is not None else self._config.default_action
        return MatchResult(controller=controller, action=action, params=params)

    def _compile(self, route: Route) -> re.Pattern[str]:
        return route.pattern.compile(
            self._base_path,
            self._config.default_constraint,
            case_sensitive=self._config.case_sensitive,
        )

    def _strip_base(self, path: str) -> str:
        base = self._base_path
        if not base:
            return path
        head = path[: len(base)]
        if head == base or (not self._config.case_sensitive and head.lower() == base.lower()):
            return path[len(base) :]
        return path

    # -- Results --

    @property
    def state(self) -> RouterState:
        return self._state

    def has_route(self) -> bool:
        """Has any registration matched yet?"""
        return isinstance(self._state, Resolved)

    def get_route(self) -> MatchResult | None:
        """The active match, or None while still searching."""
        if isinstance(self._state, Resolved):
            return self._state.result
        return None

    def resolve(self, request: Request | None = None) -> MatchResult:
        """Return the active match or raise the matching HTTP error.

        Raises ``MethodNotAllowed`` if some route matched the path but
        none accepted the method, otherwise ``NotFound``. *request* is
        only used to make the 404 detail informative.
        """
        if isinstance(self._state, Resolved):
            return self._state.result
        if self._rejected:
            raise MethodNotAllowed(frozenset(self._rejected))
        if request is None:
            raise NotFound()
        raise NotFound(f"No route matches {request.method} {request.path!r}")

    # -- Reverse resolution --

    def reverse(
        self,
        name: str,
        params: Mapping[str, object] | None = None,
        *,
        absolute: bool = False,
    ) -> str | None:
        """Build the path for the route registered as *name*.

        Returns None if no route has that name. Placeholders without a
        value in *params* are left as ``:name`` text. With *absolute*, the
        router's base path is prepended.
        """
        route = self._named.get(name)
        if route is None:
            return None
        path = route.pattern.expand(params or {})
        if absolute:
            return f"{self._base_path}{path}"
        return path


def _normalize_base(base_path: str) -> str:
    return base_path.rstrip(SEPARATOR)

