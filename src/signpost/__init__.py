"""Signpost — a first-match-wins request router.

Maps an HTTP method and path to a controller, an action and the named
parameters captured from the path, and turns route names back into paths.

Basic usage::

    from signpost import Request, Router

    request = Request.from_uri("GET", "/posts/42")
    router = Router()
    router.match(request, "/", "home#index", name="home")
    router.resources(request, "posts")

    match = router.resolve(request)   # raises NotFound / MethodNotAllowed
    match.controller, match.action, match.params
    # ("posts", "show", {"id": "42"})

    router.reverse("posts#show", {"id": 7})   # "/posts/7"
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "HTTPError",
    "InvalidPattern",
    "MatchResult",
    "MethodNotAllowed",
    "NotFound",
    "Request",
    "Route",
    "Router",
    "RouterConfig",
    "SignpostError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import signpost`` fast while providing a clean top-level API.
    """
    if name == "Router":
        from signpost.routing.router import Router

        return Router

    if name == "RouterConfig":
        from signpost.config import RouterConfig

        return RouterConfig

    if name == "Request":
        from signpost.http.request import Request

        return Request

    if name in ("Route", "MatchResult"):
        from signpost.routing import route as _route

        return getattr(_route, name)

    if name in (
        "SignpostError",
        "ConfigurationError",
        "InvalidPattern",
        "HTTPError",
        "NotFound",
        "MethodNotAllowed",
    ):
        from signpost import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
