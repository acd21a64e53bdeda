# Entrypoint for the seo_links package.
# This file makes the public API available to programmers.

from __future__ import annotations

from seo_links.__about__ import __version__
from seo_links.aggregate import aggregate
from seo_links.api import analyze_document, analyze_html, fetch_and_analyze
from seo_links.link_logic import classify, extract_anchors, locate, resolve
from seo_links.models import (
    ClassifiedLink,
    FollowType,
    LinkGraphSummary,
    LinkKind,
    LinkReport,
    Origin,
    Position,
    RawAnchor,
    ResolvedURL,
)
from seo_links.serializer import summary_to_dict, summary_to_json

# The __all__ variable defines the public API of the package.
__all__ = [
    "aggregate",
    "analyze_document",
    "analyze_html",
    "classify",
    "extract_anchors",
    "fetch_and_analyze",
    "locate",
    "resolve",
    "summary_to_dict",
    "summary_to_json",
    "ClassifiedLink",
    "FollowType",
    "LinkGraphSummary",
    "LinkKind",
    "LinkReport",
    "Origin",
    "Position",
    "RawAnchor",
    "ResolvedURL",
    "__version__",
]
