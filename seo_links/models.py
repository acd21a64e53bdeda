# Defines the data structures passed between the resolver, classifier and aggregator.

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlsplit


class FollowType(str, Enum):
    """Whether a link passes ranking signal, read from its rel attribute."""

    DOFOLLOW = "dofollow"
    NOFOLLOW = "nofollow"


class LinkKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"


class Position(str, Enum):
    """Coarse page region an anchor sits in, nearest landmark first."""

    HEADER = "header"
    NAV = "nav"
    MAIN = "main"
    FOOTER = "footer"
    ASIDE = "aside"
    SECTION = "section"
    BODY = "body"


@dataclass(frozen=True)
class Origin:
    """The analyzed page's scheme and host, plus a port when the URL names one."""

    scheme: str
    host: str
    # Only used to build absolute hrefs; internal/external tests compare host.
    port: Optional[int] = None

    @classmethod
    def from_url(cls, url: str) -> "Origin":
        """
        Build an Origin from a page URL.

        Raises:
            ValueError: if the URL has no scheme or no host, or a bad port.
        """
        parts = urlsplit(url.strip())
        host = parts.hostname or ""
        if not parts.scheme or not host:
            raise ValueError(f"Cannot derive an origin from {url!r}")
        return cls(scheme=parts.scheme.lower(), host=host.lower(), port=parts.port)

    @property
    def base(self) -> str:
        if self.port is None:
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"


@dataclass(frozen=True)
class RawAnchor:
    """One <a> element as read from the document, before classification."""

    href: str
    rel: str = ""
    target: str = ""
    anchor_text: str = ""
    has_nested_image: bool = False
    # Transient DOM handle for the position locator; never compared or printed.
    node: Any = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class ResolvedURL:
    href: str
    scheme: str = ""
    host: str = ""
    path: str = ""
    query: str = ""


@dataclass(frozen=True)
class ClassifiedLink:
    """The per-link classification record folded into a LinkGraphSummary."""

    absolute_href: str
    is_internal: bool
    follow_type: FollowType
    opens_new_tab: bool
    is_tracking: bool
    is_https: bool
    is_http: bool
    link_kind: LinkKind
    anchor_text: str
    position: Position
    external_host: Optional[str] = None
    rel: str = ""
    target: str = ""


@dataclass(frozen=True)
class ExternalLink:
    """An external link kept individually so duplicates can be grouped later."""

    href: str
    follow_type: FollowType
    target: str
    innertext: str
    rel: str


@dataclass(frozen=True)
class LinkGraphSummary:
    """Aggregate link metrics for one page. Built once, never mutated."""

    total_links: int = 0
    total_internal_links: int = 0
    total_external_links: int = 0
    unique_links_count: int = 0
    total_nofollow_links: int = 0
    total_dofollow_links: int = 0
    percentage_nofollow_links: float = 0
    percentage_dofollow_links: float = 0
    total_target_blank_links: int = 0
    total_image_links: int = 0
    total_text_links: int = 0
    total_empty_links: int = 0
    external_domains: Tuple[str, ...] = ()
    unique_external_domains_count: int = 0
    total_https_links: int = 0
    total_http_links: int = 0
    total_tracking_links: int = 0
    total_non_tracking_links: int = 0
    average_anchor_text_length: float = 0
    link_diversity_score: float = 0
    external_links: Tuple[ExternalLink, ...] = ()
    links_by_position: Tuple[Tuple[Position, int], ...] = ()
    external_registrable_domains: Tuple[str, ...] = ()
    unique_external_registrable_domains_count: int = 0
    has_underscore_links: bool = False
    url_rewriting: bool = True

    def position_counts(self) -> Dict[Position, int]:
        return dict(self.links_by_position)


@dataclass
class LinkReport:
    """The result of one analysis run: the summary plus run observability."""

    origin: Origin
    summary: LinkGraphSummary
    links: List[ClassifiedLink] = field(default_factory=list)
    skipped_anchors: int = 0
    parse_issues: int = 0
