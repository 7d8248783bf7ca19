"""URL handling for shareable mosaics.

A page URL carries its configuration either as one compact token
(``?cfg=<token>``) or as individual named parameters
(``?count=3&size=20&fore-color=%23ff0000``).  This module splits URLs,
picks the right decoder, builds share links, and makes the page-load
decision: render, redirect to the bare URL, or show an error.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal
from urllib.parse import parse_qsl, quote, urlencode, urlsplit, urlunsplit

from mosaic.codec.grid_config import GridConfig, ParseResult, encode_params, parse_params, parse_token

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_PARAM = "cfg"

# Characters ``encodeURIComponent`` leaves alone on top of quote()'s own.
_URI_COMPONENT_SAFE = "!*'()"

ERROR_MESSAGE = "Invalid configuration! Go back to the default: {url}"

PageAction = Literal["render", "redirect", "error"]


# ---------------------------------------------------------------------------
# Data structures
# ---------------------------------------------------------------------------


@dataclass
class UrlParameters:
    """A page URL split into its bare part and decoded query parameters."""

    pure_url: str
    params: dict[str, str] = field(default_factory=dict)
    has_parameters: bool = False


@dataclass
class PageLoad:
    """What the page should do with the URL it was opened with."""

    action: PageAction
    config: GridConfig
    pure_url: str
    message: str = ""
    """Human-readable error for ``action == "error"``."""

    @property
    def redirect_url(self) -> str | None:
        return self.pure_url if self.action == "redirect" else None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_url(url: str) -> UrlParameters:
    """Split *url* into its parameter-free form and its query parameters.

    Keys and values are percent-decoded and stripped.  Blank values are
    kept so flag keys such as ``inverse`` stay present.  When a key repeats,
    the last value wins.
    """
    parts = urlsplit(url)
    pure_url = urlunsplit((parts.scheme, parts.netloc, parts.path, "", ""))
    params = {
        key.strip(): value.strip()
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
    }
    return UrlParameters(pure_url=pure_url, params=params, has_parameters=bool(parts.query))


def parse_parameters(
    params: Mapping[str, str],
    token_param: str = DEFAULT_TOKEN_PARAM,
) -> ParseResult:
    """Decode the configuration carried by *params*.

    The compact token wins when both forms are present.
    """
    if token_param in params:
        return parse_token(params[token_param])
    return parse_params(params)


def config_from_parameters(
    params: Mapping[str, str],
    token_param: str = DEFAULT_TOKEN_PARAM,
) -> GridConfig:
    return parse_parameters(params, token_param).config


# ---------------------------------------------------------------------------
# Building URLs
# ---------------------------------------------------------------------------


def share_url(
    config: GridConfig,
    base_url: str,
    token_param: str = DEFAULT_TOKEN_PARAM,
) -> str:
    """Link that reopens *config*; the bare URL for the default mosaic."""
    pure_url = parse_url(base_url).pure_url
    if config.is_default:
        return pure_url
    token = quote(config.to_token(), safe=_URI_COMPONENT_SAFE)
    return f"{pure_url}?{token_param}={token}"


def params_url(config: GridConfig, base_url: str) -> str:
    """Link that reopens *config* through the named-parameter form."""
    pure_url = parse_url(base_url).pure_url
    if config.is_default:
        return pure_url
    query = urlencode(encode_params(config), quote_via=quote)
    return f"{pure_url}?{query}"


# ---------------------------------------------------------------------------
# Page-load decision
# ---------------------------------------------------------------------------


def resolve_page(url: str, token_param: str = DEFAULT_TOKEN_PARAM) -> PageLoad:
    """Decide how a page opened at *url* should behave.

    * no query string → render the default mosaic;
    * parameters that decode to the default → redirect to the bare URL;
    * an invalid configuration → error with a link back to the bare URL;
    * anything else → render the decoded mosaic.
    """
    parsed = parse_url(url)
    if not parsed.has_parameters:
        return PageLoad(action="render", config=GridConfig(), pure_url=parsed.pure_url)

    result = parse_parameters(parsed.params, token_param)
    config = result.config

    if config.is_default:
        logger.info("Parameters decode to the default mosaic; redirecting to %s", parsed.pure_url)
        return PageLoad(action="redirect", config=config, pure_url=parsed.pure_url)

    if not config.is_valid:
        logger.warning(
            "Rejected configuration from %s%s",
            url,
            f" ({result.error})" if result.error else "",
        )
        return PageLoad(
            action="error",
            config=config,
            pure_url=parsed.pure_url,
            message=ERROR_MESSAGE.format(url=parsed.pure_url),
        )

    return PageLoad(action="render", config=config, pure_url=parsed.pure_url)
