"""Tests for resource expansion — the seven conventional CRUD routes."""

import pytest

from signpost.http.request import Request
from signpost.routing.resources import RESOURCE_ACTIONS, expand_resource
from signpost.routing.route import MatchResult
from signpost.routing.router import Router


def _route(method: str, uri: str, **form: str) -> MatchResult | None:
    request = Request.from_uri(method, uri, form=form)
    router = Router()
    router.resources(request, "posts")
    return router.get_route()


class TestExpandResource:
    def test_table_order(self) -> None:
        routes = expand_resource("posts")
        assert [r.action for r in routes] == list(RESOURCE_ACTIONS)
        assert RESOURCE_ACTIONS == ("create", "index", "new", "update", "destroy", "show", "edit")

    def test_table_contents(self) -> None:
        rows = [(r.pattern, r.target, r.via, r.name) for r in expand_resource("posts")]
        assert rows == [
            ("/posts", "posts#create", "POST", None),
            ("/posts", "posts#index", "GET", "posts"),
            ("/posts/new", "posts#new", "GET", "posts#new"),
            ("/posts/:id", "posts#update", "PUT", None),
            ("/posts/:id", "posts#destroy", "DELETE", None),
            ("/posts/:id", "posts#show", "GET", "posts#show"),
            ("/posts/:id/edit", "posts#edit", "GET", None),
        ]

    def test_only(self) -> None:
        assert [r.action for r in expand_resource("posts", only="index,show")] == ["index", "show"]

    def test_only_uses_table_order(self) -> None:
        assert [r.action for r in expand_resource("posts", only="show,index")] == ["index", "show"]

    def test_only_ignores_unknown(self) -> None:
        assert [r.action for r in expand_resource("posts", only="index,publish")] == ["index"]

    def test_only_tolerates_spaces(self) -> None:
        assert [r.action for r in expand_resource("posts", only="index, show")] == ["index", "show"]

    def test_only_wins_over_exclude(self) -> None:
        routes = expand_resource("posts", only="index", exclude="index")
        assert [r.action for r in routes] == ["index"]

    def test_empty_only_registers_nothing(self) -> None:
        assert expand_resource("posts", only="") == []

    def test_exclude(self) -> None:
        routes = expand_resource("posts", exclude="destroy,edit")
        assert [r.action for r in routes] == ["create", "index", "new", "update", "show"]

    def test_exclude_iterable(self) -> None:
        routes = expand_resource("posts", exclude=["create", "update", "destroy"])
        assert [r.action for r in routes] == ["index", "new", "show", "edit"]


class TestRouterResources:
    def test_registers_all_seven(self) -> None:
        router = Router()
        router.resources(Request.from_uri("GET", "/elsewhere"), "posts")
        assert len(router.routes) == 7
        assert router.named_routes == {
            "posts": "/posts",
            "posts#new": "/posts/new",
            "posts#show": "/posts/:id",
        }

    def test_only_registers_exactly_those(self) -> None:
        router = Router()
        router.resources(Request.from_uri("GET", "/elsewhere"), "posts", only="index,show")
        assert [(r.path, r.target.action) for r in router.routes] == [
            ("/posts", "index"),
            ("/posts/:id", "show"),
        ]

    @pytest.mark.parametrize(
        ("method", "uri", "action", "params"),
        [
            ("POST", "/posts", "create", {}),
            ("GET", "/posts", "index", {}),
            ("GET", "/posts/new", "new", {}),
            ("PUT", "/posts/5", "update", {"id": "5"}),
            ("DELETE", "/posts/5", "destroy", {"id": "5"}),
            ("GET", "/posts/5", "show", {"id": "5"}),
            ("GET", "/posts/5/edit", "edit", {"id": "5"}),
        ],
    )
    def test_dispatch(self, method: str, uri: str, action: str, params: dict[str, str]) -> None:
        assert _route(method, uri) == MatchResult(controller="posts", action=action, params=params)

    def test_form_simulated_delete(self) -> None:
        assert _route("POST", "/posts/5", _method="delete").action == "destroy"

    def test_query_simulated_put(self) -> None:
        assert _route("POST", "/posts/5?_method=PUT").action == "update"

    def test_no_match(self) -> None:
        assert _route("GET", "/comments") is None

    def test_excluded_route_not_matched(self) -> None:
        router = Router()
        request = Request.from_uri("GET", "/posts/5/edit")
        router.resources(request, "posts", exclude="edit")
        assert router.has_route() is False

    def test_names_recorded_after_resolution(self) -> None:
        router = Router()
        request = Request.from_uri("GET", "/")
        router.match(request, "/", "home#index")
        router.resources(request, "posts")
        assert router.reverse("posts#show", {"id": 3}) == "/posts/3"
        assert router.get_route().controller == "home"
