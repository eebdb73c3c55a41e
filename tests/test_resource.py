"""Tests for waypoint.routing.resource — CRUD resource routers."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.http.request import Request
from waypoint.http.response import text
from waypoint.routing.resource import ResourceHandlers, create_resource_router
from waypoint.routing.router import Router


def _request(method: str, path: str) -> Request:
    return Request.build(method, f"https://example.com{path}")


def _label(name: str):
    def handler(request, context, params):
        return text(name if "id" not in params else f"{name}:{params['id']}")

    handler.__name__ = name
    return handler


ALL = ResourceHandlers(
    index=_label("index"),
    show=_label("show"),
    create=_label("create"),
    update=_label("update"),
    destroy=_label("destroy"),
)


class TestResourceRouter:
    def test_route_layout(self) -> None:
        router = create_resource_router(ALL)
        assert [(str(r.method), r.path) for r in router.routes] == [
            ("GET", "/"),
            ("GET", "/:id"),
            ("POST", "/"),
            ("PUT", "/:id"),
            ("DELETE", "/:id"),
        ]

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("method", "path", "expected"),
        [
            ("GET", "/api/users/", "index"),
            ("GET", "/api/users/123", "show:123"),
            ("POST", "/api/users/", "create"),
            ("PUT", "/api/users/123", "update:123"),
            ("DELETE", "/api/users/123", "destroy:123"),
        ],
    )
    async def test_crud_dispatch(self, method: str, path: str, expected: str) -> None:
        main = Router()
        main.use("/users", create_resource_router(ALL))

        response = await main.handle(_request(method, path))
        assert response.status == 200
        assert response.text == expected

    @pytest.mark.anyio
    @pytest.mark.parametrize(
        ("method", "path"),
        [("POST", "/api/users"), ("PUT", "/api/users/1"), ("DELETE", "/api/users/1")],
    )
    async def test_missing_handlers_are_404_not_405(self, method: str, path: str) -> None:
        main = Router()
        main.use(
            "/users",
            create_resource_router(ResourceHandlers(index=_label("index"), show=_label("show"))),
        )

        response = await main.handle(_request(method, path))
        assert response.status == 404
        assert response.json()["method"] == method

    def test_mapping_input(self) -> None:
        router = create_resource_router({"index": _label("index")})
        assert [r.path for r in router.routes] == ["/"]

    def test_unknown_action_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown resource actions: list"):
            create_resource_router({"list": _label("list")})

    def test_empty_handlers(self) -> None:
        assert create_resource_router(ResourceHandlers()).routes == ()
