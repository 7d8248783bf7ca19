"""Tests for URL parsing, share links and the page-load decision."""

from __future__ import annotations

from mosaic.codec.grid_config import GridConfig
from mosaic.web.url import (
    config_from_parameters,
    params_url,
    parse_parameters,
    parse_url,
    resolve_page,
    share_url,
)

BASE = "http://example.com/mosaic/"


class TestParseUrl:
    def test_without_query(self) -> None:
        parsed = parse_url(BASE)
        assert parsed.pure_url == BASE
        assert parsed.params == {}
        assert parsed.has_parameters is False

    def test_decodes_values(self) -> None:
        parsed = parse_url(BASE + "?cfg=5%2132%210%213f&x=1")
        assert parsed.pure_url == BASE
        assert parsed.params == {"cfg": "5!32!0!3f", "x": "1"}
        assert parsed.has_parameters is True

    def test_keeps_flag_keys(self) -> None:
        parsed = parse_url(BASE + "?inverse&count=3")
        assert parsed.params == {"inverse": "", "count": "3"}

    def test_strips_whitespace(self) -> None:
        assert parse_url(BASE + "?count=%203%20").params["count"] == "3"

    def test_last_value_wins(self) -> None:
        assert parse_url(BASE + "?size=20&size=30").params["size"] == "30"

    def test_drops_fragment(self) -> None:
        assert parse_url(BASE + "?count=3#top").pure_url == BASE

    def test_empty_query(self) -> None:
        assert parse_url(BASE + "?").has_parameters is False


class TestParseParameters:
    def test_token_takes_precedence(self) -> None:
        params = {"cfg": "3!14!0000!____!40", "count": "5"}
        assert config_from_parameters(params).count == 3

    def test_named_parameters(self) -> None:
        assert config_from_parameters({"count": "5"}).count == 5

    def test_custom_token_key(self) -> None:
        result = parse_parameters({"c": "3!14!0000!____"}, token_param="c")
        assert result.ok
        assert result.config.count == 3


class TestShareUrl:
    def test_default_gives_bare_url(self, default_config: GridConfig) -> None:
        assert share_url(default_config, BASE + "?cfg=old") == BASE

    def test_token_is_embedded(self, corner_config: GridConfig) -> None:
        assert share_url(corner_config, BASE) == BASE + "?cfg=3!14!0000!____!40"

    def test_inverse_marker_survives(self, corner_config: GridConfig) -> None:
        corner_config.inverse = True
        url = share_url(corner_config, BASE)
        assert url.endswith("!~40")
        assert config_from_parameters(parse_url(url).params) == corner_config

    def test_reopens_same_config(self, corner_config: GridConfig) -> None:
        corner_config.back_color = "#0a0b0c"
        url = share_url(corner_config, BASE)
        assert config_from_parameters(parse_url(url).params) == corner_config


class TestParamsUrl:
    def test_default_gives_bare_url(self, default_config: GridConfig) -> None:
        assert params_url(default_config, BASE) == BASE

    def test_colours_are_escaped(self, corner_config: GridConfig) -> None:
        url = params_url(corner_config, BASE)
        assert "fore-color=%23000000" in url
        assert "#" not in url

    def test_reopens_same_config(self, corner_config: GridConfig) -> None:
        corner_config.inverse = True
        url = params_url(corner_config, BASE)
        assert config_from_parameters(parse_url(url).params) == corner_config


class TestResolvePage:
    def test_no_parameters_renders_default(self) -> None:
        page = resolve_page(BASE)
        assert page.action == "render"
        assert page.config.is_default
        assert page.redirect_url is None

    def test_default_parameters_redirect(self) -> None:
        page = resolve_page(BASE + "?count=9")
        assert page.action == "redirect"
        assert page.redirect_url == BASE

    def test_default_token_redirects(self) -> None:
        assert resolve_page(BASE + "?cfg=9!32!0000!____").action == "redirect"

    def test_invalid_shows_error(self) -> None:
        page = resolve_page(BASE + "?count=65")
        assert page.action == "error"
        assert BASE in page.message
        assert page.redirect_url is None

    def test_malformed_token_shows_error(self) -> None:
        assert resolve_page(BASE + "?cfg=zz").action == "error"

    def test_overlong_colour_shows_error(self) -> None:
        assert resolve_page(BASE + "?cfg=9!32!10000!____").action == "error"

    def test_token_renders(self) -> None:
        page = resolve_page(BASE + "?cfg=5!32!0!3f")
        assert page.action == "render"
        assert page.config.count == 5

    def test_token_beats_named_parameters(self) -> None:
        page = resolve_page(BASE + "?cfg=5!32!0!3f&count=7")
        assert page.config.count == 5

    def test_named_parameters_render(self) -> None:
        page = resolve_page(BASE + "?count=3&size=20&fore-color=%23FF0000")
        assert page.action == "render"
        assert page.config.fore_color == "#ff0000"
