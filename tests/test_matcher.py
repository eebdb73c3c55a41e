"""Tests for waypoint.routing.matcher — path template compilation."""

import pytest

from waypoint.errors import ConfigurationError
from waypoint.routing.matcher import compile_path, join_paths, normalize_template


class TestCompilePath:
    def test_static(self) -> None:
        m = compile_path("/users")
        assert m.param_names == ()
        assert m.match("/users") == {}
        assert m.match("/posts") is None

    def test_single_param(self) -> None:
        m = compile_path("/users/:id")
        assert m.param_names == ("id",)
        assert m.match("/users/42") == {"id": "42"}

    def test_multiple_params_in_order(self) -> None:
        m = compile_path("/users/:user_id/posts/:post_id")
        assert m.param_names == ("user_id", "post_id")
        assert m.match("/users/1/posts/9") == {"user_id": "1", "post_id": "9"}

    def test_params_inside_one_segment(self) -> None:
        m = compile_path("/files/:name.:ext")
        assert m.match("/files/report.pdf") == {"name": "report", "ext": "pdf"}

    def test_param_does_not_cross_slash(self) -> None:
        m = compile_path("/users/:id")
        assert m.match("/users/1/2") is None

    def test_param_requires_a_value(self) -> None:
        m = compile_path("/users/:id")
        assert m.match("/users/") is None

    def test_group_count_matches_param_names(self) -> None:
        m = compile_path("/a/:x/b/:y/*")
        assert m.pattern.groups == len(m.param_names)

    def test_literal_characters_are_escaped(self) -> None:
        m = compile_path("/v1.0/items+new")
        assert m.matches("/v1.0/items+new")
        assert not m.matches("/v1x0/items+new")
        assert not m.matches("/v1.0/itemssnew")

    def test_anchored_at_both_ends(self) -> None:
        m = compile_path("/users")
        assert not m.matches("/api/users")
        assert not m.matches("/users/extra")


class TestTrailingSlash:
    def test_trailing_slash_tolerated(self) -> None:
        m = compile_path("/users")
        assert m.matches("/users")
        assert m.matches("/users/")

    def test_only_one_trailing_slash(self) -> None:
        m = compile_path("/users")
        assert not m.matches("/users//")

    def test_param_with_trailing_slash(self) -> None:
        m = compile_path("/users/:id")
        assert m.match("/users/42/") == {"id": "42"}

    def test_template_trailing_slash_is_normalized(self) -> None:
        m = compile_path("/users/")
        assert m.template == "/users"
        assert m.matches("/users")


class TestRoot:
    def test_root_matches_slash(self) -> None:
        assert compile_path("/").matches("/")

    def test_root_matches_empty_path(self) -> None:
        assert compile_path("/").matches("")

    def test_root_rejects_other_paths(self) -> None:
        assert not compile_path("/").matches("/users")


class TestWildcard:
    def test_wildcard_captures_remainder(self) -> None:
        m = compile_path("/static/*")
        assert m.param_names == ("*",)
        assert m.match("/static/css/site.css") == {"*": "css/site.css"}

    def test_wildcard_strips_trailing_slash(self) -> None:
        m = compile_path("/static/*")
        assert m.match("/static/docs/") == {"*": "docs"}

    def test_wildcard_may_be_empty(self) -> None:
        m = compile_path("/static/*")
        assert m.match("/static/") == {"*": ""}

    def test_wildcard_with_params(self) -> None:
        m = compile_path("/repos/:owner/*")
        assert m.match("/repos/acme/src/main.py") == {"owner": "acme", "*": "src/main.py"}


class TestInvalidTemplates:
    def test_duplicate_param_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate parameter 'id'"):
            compile_path("/users/:id/friends/:id")

    def test_two_wildcards_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="Duplicate wildcard"):
            compile_path("/a/*/b/*")


class TestNormalizeAndJoin:
    @pytest.mark.parametrize(
        ("template", "expected"),
        [("/", "/"), ("", "/"), ("users", "/users"), ("/users/", "/users"), ("/a/b", "/a/b")],
    )
    def test_normalize(self, template: str, expected: str) -> None:
        assert normalize_template(template) == expected

    def test_join_root_route_maps_to_prefix(self) -> None:
        assert join_paths("/users", "/") == "/users"

    def test_join_strips_prefix_trailing_slash(self) -> None:
        assert join_paths("/users/", "/:id") == "/users/:id"

    def test_join_root_prefix(self) -> None:
        assert join_paths("/", "/health") == "/health"
