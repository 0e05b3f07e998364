"""Resource expansion — the seven conventional CRUD routes for a controller.

``expand_resource("posts")`` yields, in this order:

=========  =====================  ======  ==============
action     pattern                method  name
=========  =====================  ======  ==============
create     ``/posts``             POST
index      ``/posts``             GET     ``posts``
new        ``/posts/new``         GET     ``posts#new``
update     ``/posts/:id``         PUT
destroy    ``/posts/:id``         DELETE
show       ``/posts/:id``         GET     ``posts#show``
edit       ``/posts/:id/edit``    GET
=========  =====================  ======  ==============

``new`` is registered before ``show`` so ``/posts/new`` is never captured
as an id.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from signpost._internal.options import split_options


@dataclass(frozen=True, slots=True)
class ResourceRoute:
    """One expanded registration, ready to hand to ``Router.match``."""

    action: str
    pattern: str
    target: str
    via: str
    name: str | None = None


# (action, path suffix, method, named?)
_TABLE: tuple[tuple[str, str, str, bool], ...] = (
    ("create", "", "POST", False),
    ("index", "", "GET", True),
    ("new", "/new", "GET", True),
    ("update", "/:id", "PUT", False),
    ("destroy", "/:id", "DELETE", False),
    ("show", "/:id", "GET", True),
    ("edit", "/:id/edit", "GET", False),
)

RESOURCE_ACTIONS: tuple[str, ...] = tuple(row[0] for row in _TABLE)


def _route_name(controller: str, action: str) -> str:
    # The collection route is named after the controller alone
    if action == "index":
        return controller
    return f"{controller}#{action}"


def expand_resource(
    controller: str,
    *,
    only: str | Iterable[str] | None = None,
    exclude: str | Iterable[str] | None = None,
) -> list[ResourceRoute]:
    """Return the routes to register for *controller*, in table order.

    *only* selects exactly the listed actions and takes precedence:
    *exclude* is not consulted when *only* is given. Unknown action names
    in either list are ignored.
    """
    if only is not None:
        selected = set(split_options(only))
        keep = [action for action in RESOURCE_ACTIONS if action in selected]
    else:
        excluded = set(split_options(exclude))
        keep = [action for action in RESOURCE_ACTIONS if action not in excluded]

    routes: list[ResourceRoute] = []
    for action, suffix, method, named in _TABLE:
        if action not in keep:
            continue
        routes.append(
            ResourceRoute(
                action=action,
                pattern=f"/{controller}{suffix}",
                target=f"{controller}#{action}",
                via=method,
                name=_route_name(controller, action) if named else None,
            )
        )
    return routes
