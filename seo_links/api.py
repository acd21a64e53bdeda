# seo_links/api.py
# The primary, programmer-facing API for the library.

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Iterable, List, Optional, Union

import httpx
from bs4 import Tag

from seo_links.aggregate import aggregate
from seo_links.config import load_config
from seo_links.fetcher import PageFetcher
from seo_links.link_logic import DEFAULT_SKIP_SCHEMES, classify_document
from seo_links.models import LinkReport, Origin
from seo_links.parsing import parse_document

log = logging.getLogger(__name__)


def _as_origin(origin: Union[Origin, str]) -> Origin:
    return origin if isinstance(origin, Origin) else Origin.from_url(origin)


def analyze_document(
    doc: Tag,
    origin: Union[Origin, str],
    *,
    skip_schemes: Iterable[str] = DEFAULT_SKIP_SCHEMES,
    parse_issues: int = 0,
) -> LinkReport:
    """
    Classify every link in an already-parsed document and summarize them.

    Pure: nothing is cached or mutated, so concurrent calls on different
    documents are safe.
    """
    origin = _as_origin(origin)
    links, skipped = classify_document(doc, origin, skip_schemes)
    summary = aggregate(links)
    log.info(
        "Analyzed %d links for %s (%d skipped).",
        summary.total_links,
        origin.base,
        skipped,
    )
    return LinkReport(
        origin=origin,
        summary=summary,
        links=links,
        skipped_anchors=skipped,
        parse_issues=parse_issues,
    )


def analyze_html(
    html: Union[str, bytes],
    origin: Union[Origin, str],
    *,
    skip_schemes: Iterable[str] = DEFAULT_SKIP_SCHEMES,
) -> LinkReport:
    """Parse page source leniently, then run analyze_document on it."""
    parsed = parse_document(html)
    return analyze_document(
        parsed.soup, origin, skip_schemes=skip_schemes, parse_issues=parsed.issues
    )


def _apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    for key, value in overrides.items():
        if value is None:
            continue
        config[key] = value
        log.info("Applied override - %s set to: %s", key, value)


async def fetch_and_analyze(
    url: str,
    *,
    skip_schemes: Optional[List[str]] = None,
    timeout: Optional[float] = None,
    user_agent: Optional[str] = None,
    use_cache: Optional[bool] = None,
    config: Optional[Dict[str, Any]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> LinkReport:
    """
    Fetch one page and analyze its links against the page's final origin.

    Raises:
        FetchError: when the page cannot be fetched as HTML.
    """
    log.info("Starting link analysis for: %s", url)
    config = copy.deepcopy(config) if config is not None else load_config()
    _apply_overrides(
        config,
        {"skip_schemes": skip_schemes, "timeout": timeout, "user_agent": user_agent},
    )
    if use_cache is not None:
        config["cache"]["enabled"] = use_cache
        log.info("Applied override - cache enabled: %s", use_cache)

    async with PageFetcher(config, transport=transport) as fetcher:
        page = await fetcher.fetch(url)

    return analyze_html(
        page.text,
        Origin.from_url(page.final_url),
        skip_schemes=config["skip_schemes"],
    )
