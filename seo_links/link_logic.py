# seo_links/link_logic.py
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple
from urllib.parse import urlsplit

import tldextract
from bs4 import Tag

from seo_links.models import (
    ClassifiedLink,
    FollowType,
    LinkKind,
    Origin,
    Position,
    RawAnchor,
    ResolvedURL,
)

log = logging.getLogger(__name__)

DEFAULT_SKIP_SCHEMES: Tuple[str, ...] = ("tel", "mailto", "javascript")

# Nearest enclosing element of one of these names decides a link's position.
LANDMARKS = {
    "header": Position.HEADER,
    "nav": Position.NAV,
    "main": Position.MAIN,
    "footer": Position.FOOTER,
    "aside": Position.ASIDE,
    "section": Position.SECTION,
}

# Offline extractor: bundled public suffix snapshot, no fetch, no disk cache.
_TLD_EXTRACT = tldextract.TLDExtract(cache_dir=None, suffix_list_urls=())


# ---------- URL helpers ----------


def _is_skipped_scheme(href: str, skip_schemes: Iterable[str]) -> bool:
    lowered = href.lower()
    return any(lowered.startswith(f"{s.lower()}:") for s in skip_schemes)


def resolve(
    raw_href: str,
    origin: Origin,
    skip_schemes: Iterable[str] = DEFAULT_SKIP_SCHEMES,
) -> Tuple[Optional[ResolvedURL], bool]:
    """
    Turn a raw href into a ResolvedURL against the page origin.

    - "//host/path" gets the origin's scheme.
    - "/path" gets "scheme://host".
    - Anything else is parsed as given (absolute or document-relative).

    ResolvedURL.scheme is the scheme written in the href itself, so it stays
    empty for the two prefixed forms even though ResolvedURL.href is absolute.

    Returns (resolved, True) on success and (None, False) when the href uses a
    skipped scheme or cannot be parsed. Never raises.
    """
    href = (raw_href or "").strip()
    if not href or href == "#":
        return None, False
    if _is_skipped_scheme(href, skip_schemes):
        return None, False

    explicit_scheme = True
    if href.startswith("//"):
        candidate = f"{origin.scheme}:{href}"
        explicit_scheme = False
    elif href.startswith("/"):
        candidate = f"{origin.base}{href}"
        explicit_scheme = False
    else:
        candidate = href

    try:
        parts = urlsplit(candidate)
        # .port raises on a non-numeric or out-of-range port
        parts.port
        host = (parts.hostname or "").lower()
    except ValueError as e:
        log.debug("Dropping unparseable href %r: %s", href, e)
        return None, False

    return (
        ResolvedURL(
            href=candidate,
            scheme=parts.scheme.lower() if explicit_scheme else "",
            host=host,
            path=parts.path,
            query=parts.query,
        ),
        True,
    )


def is_internal_host(host: str, origin: Origin) -> bool:
    """A host is internal when absent, equal to the origin host, or its www. form."""
    if not host:
        return True
    host = host.lower()
    origin_host = origin.host.lower()
    return host == origin_host or host == f"www.{origin_host}"


def registrable_domain(host: str) -> str:
    """
    Returns eTLD+1 for a host.
    Falls back to host (minus a leading 'www.') when no public suffix matches.
    """
    ext = _TLD_EXTRACT(host)
    if ext.domain and ext.suffix:
        return f"{ext.domain}.{ext.suffix}".lower()
    return host[4:] if host.startswith("www.") else host


# ---------- Document walk ----------


def _attr_text(tag: Tag, name: str) -> str:
    value = tag.get(name)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    # multi-valued attributes such as rel come back as lists
    return " ".join(str(v) for v in value)


def extract_anchors(doc: Tag) -> List[RawAnchor]:
    """
    Return every navigational <a> in document order.

    Anchors with an empty or "#" href are left out. Elements that cannot be
    read are skipped.
    """
    out: List[RawAnchor] = []
    for tag in doc.find_all("a"):
        try:
            href = _attr_text(tag, "href").strip()
            if not href or href == "#":
                continue
            out.append(
                RawAnchor(
                    href=href,
                    rel=_attr_text(tag, "rel"),
                    target=_attr_text(tag, "target"),
                    anchor_text=tag.get_text().strip(),
                    has_nested_image=tag.find("img") is not None,
                    node=tag,
                )
            )
        except (AttributeError, TypeError, ValueError) as e:
            log.debug("Skipping unreadable anchor element: %s", e)
            continue
    return out


def locate(anchor_node: Optional[Tag]) -> Position:
    """Bucket an anchor into the nearest enclosing landmark, or BODY."""
    if anchor_node is None:
        return Position.BODY
    for parent in anchor_node.parents:
        position = LANDMARKS.get(parent.name or "")
        if position is not None:
            return position
    return Position.BODY


# ---------- Classification ----------


def classify(
    raw: RawAnchor,
    origin: Origin,
    skip_schemes: Iterable[str] = DEFAULT_SKIP_SCHEMES,
) -> Tuple[Optional[ClassifiedLink], bool]:
    """
    Returns (link, skip). When skip is True the link is None and the anchor
    contributes nothing to the summary.
    """
    resolved, ok = resolve(raw.href, origin, skip_schemes)
    if not ok or resolved is None:
        return None, True

    # substring test on purpose: "external nofollow noopener" is nofollow too
    follow_type = (
        FollowType.NOFOLLOW if "nofollow" in raw.rel.lower() else FollowType.DOFOLLOW
    )
    is_internal = is_internal_host(resolved.host, origin)

    return (
        ClassifiedLink(
            absolute_href=resolved.href,
            is_internal=is_internal,
            follow_type=follow_type,
            opens_new_tab=raw.target.strip().lower() == "_blank",
            is_tracking="utm_" in resolved.query.lower(),
            is_https=resolved.scheme == "https",
            is_http=resolved.scheme == "http",
            link_kind=LinkKind.IMAGE if raw.has_nested_image else LinkKind.TEXT,
            anchor_text=raw.anchor_text,
            position=locate(raw.node),
            external_host=None if is_internal else resolved.host,
            rel=raw.rel,
            target=raw.target,
        ),
        False,
    )


def classify_document(
    doc: Tag,
    origin: Origin,
    skip_schemes: Iterable[str] = DEFAULT_SKIP_SCHEMES,
) -> Tuple[List[ClassifiedLink], int]:
    """Extract and classify every anchor. Returns (links, skipped_count)."""
    skip_schemes = tuple(skip_schemes)
    links: List[ClassifiedLink] = []
    skipped = 0
    for raw in extract_anchors(doc):
        link, skip = classify(raw, origin, skip_schemes)
        if skip or link is None:
            log.debug("Skipped anchor with href %r", raw.href)
            skipped += 1
            continue
        links.append(link)
    return links, skipped
