# Folds classified links into a LinkGraphSummary.

from __future__ import annotations

import os
from typing import Dict, Iterable, List
from urllib.parse import urlsplit

from seo_links.link_logic import registrable_domain
from seo_links.models import (
    ClassifiedLink,
    ExternalLink,
    FollowType,
    LinkGraphSummary,
    LinkKind,
    Position,
)

# A path ending in one of these means the site does not rewrite URLs.
WEB_PAGE_EXTENSIONS = {
    "html", "htm", "xhtml", "xht", "mhtml", "mht", "asp", "aspx", "cgi",
    "ihtml", "jsp", "las", "pl", "php", "php3", "phtml", "shtml",
}


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0
    return round(count / total * 100, 2)


def _ordered_unique(values: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(values))


def _has_page_extension(href: str) -> bool:
    try:
        path = urlsplit(href).path
    except ValueError:
        return False
    _, ext = os.path.splitext(path)
    return ext[1:].strip() in WEB_PAGE_EXTENSIONS


def aggregate(links: Iterable[ClassifiedLink]) -> LinkGraphSummary:
    """
    Reduce a list of classified links into page-level metrics.

    average_anchor_text_length only covers internal text links, matching the
    report this engine feeds. Every ratio is 0 for a page with no links.
    """
    links = list(links)
    total = len(links)

    internal = [ln for ln in links if ln.is_internal]
    external = [ln for ln in links if not ln.is_internal]
    nofollow = sum(1 for ln in links if ln.follow_type is FollowType.NOFOLLOW)
    dofollow = total - nofollow
    unique = len({ln.absolute_href for ln in links})

    external_domains = _ordered_unique(
        ln.external_host for ln in external if ln.external_host
    )
    registrable = _ordered_unique(registrable_domain(d) for d in external_domains)

    internal_text = [ln for ln in internal if ln.link_kind is LinkKind.TEXT]
    average_anchor = (
        round(sum(len(ln.anchor_text) for ln in internal_text) / len(internal_text), 2)
        if internal_text
        else 0
    )

    by_position: Dict[Position, int] = {p: 0 for p in Position}
    for ln in links:
        by_position[ln.position] += 1

    tracking = sum(1 for ln in links if ln.is_tracking)
    image = sum(1 for ln in links if ln.link_kind is LinkKind.IMAGE)

    return LinkGraphSummary(
        total_links=total,
        total_internal_links=len(internal),
        total_external_links=len(external),
        unique_links_count=unique,
        total_nofollow_links=nofollow,
        total_dofollow_links=dofollow,
        percentage_nofollow_links=_percentage(nofollow, total),
        percentage_dofollow_links=_percentage(dofollow, total),
        total_target_blank_links=sum(1 for ln in links if ln.opens_new_tab),
        total_image_links=image,
        total_text_links=total - image,
        total_empty_links=sum(1 for ln in links if not ln.anchor_text),
        external_domains=tuple(external_domains),
        unique_external_domains_count=len(external_domains),
        total_https_links=sum(1 for ln in links if ln.is_https),
        total_http_links=sum(1 for ln in links if ln.is_http),
        total_tracking_links=tracking,
        total_non_tracking_links=total - tracking,
        average_anchor_text_length=average_anchor,
        link_diversity_score=round(unique / total, 2) if total else 0,
        external_links=tuple(
            ExternalLink(
                href=ln.absolute_href,
                follow_type=ln.follow_type,
                target=ln.target,
                innertext=ln.anchor_text,
                rel=ln.rel,
            )
            for ln in external
        ),
        links_by_position=tuple(by_position.items()),
        external_registrable_domains=tuple(registrable),
        unique_external_registrable_domains_count=len(registrable),
        has_underscore_links=any("_" in ln.absolute_href for ln in internal),
        url_rewriting=not any(_has_page_extension(ln.absolute_href) for ln in internal),
    )
