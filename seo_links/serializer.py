# seo_links/serializer.py
# Stable wire form of a LinkGraphSummary for persistence and the report layer.

from __future__ import annotations

import json
from typing import Any, Dict

from seo_links.models import ClassifiedLink, ExternalLink, LinkGraphSummary, LinkReport


def _external_link_to_dict(link: ExternalLink) -> Dict[str, Any]:
    return {
        "href": link.href,
        "follow_type": link.follow_type.value,
        "target": link.target,
        "innertext": link.innertext,
        "rel": link.rel,
    }


def summary_to_dict(summary: LinkGraphSummary) -> Dict[str, Any]:
    """Key names are consumed by the report layer; do not rename them."""
    return {
        "total_links": summary.total_links,
        "total_internal_links": summary.total_internal_links,
        "total_external_links": summary.total_external_links,
        "unique_links_count": summary.unique_links_count,
        "total_nofollow_links": summary.total_nofollow_links,
        "total_dofollow_links": summary.total_dofollow_links,
        "percentage_nofollow_links": summary.percentage_nofollow_links,
        "percentage_dofollow_links": summary.percentage_dofollow_links,
        "total_target_blank_links": summary.total_target_blank_links,
        "total_image_links": summary.total_image_links,
        "total_text_links": summary.total_text_links,
        "total_empty_links": summary.total_empty_links,
        "external_domains": list(summary.external_domains),
        "unique_external_domains_count": summary.unique_external_domains_count,
        "total_https_links": summary.total_https_links,
        "total_http_links": summary.total_http_links,
        "total_tracking_links": summary.total_tracking_links,
        "total_non_tracking_links": summary.total_non_tracking_links,
        "average_anchor_text_length": summary.average_anchor_text_length,
        "link_diversity_score": summary.link_diversity_score,
        "external_links": [_external_link_to_dict(e) for e in summary.external_links],
        "links_by_position": {
            position.value: count for position, count in summary.links_by_position
        },
        "external_registrable_domains": list(summary.external_registrable_domains),
        "unique_external_registrable_domains_count": summary.unique_external_registrable_domains_count,
        "has_underscore_links": summary.has_underscore_links,
        "url_rewriting": summary.url_rewriting,
    }


def summary_to_json(summary: LinkGraphSummary, indent: int | None = None) -> str:
    return json.dumps(summary_to_dict(summary), indent=indent, ensure_ascii=False)


def link_to_dict(link: ClassifiedLink) -> Dict[str, Any]:
    return {
        "href": link.absolute_href,
        "is_internal": link.is_internal,
        "follow_type": link.follow_type.value,
        "opens_new_tab": link.opens_new_tab,
        "is_tracking": link.is_tracking,
        "is_https": link.is_https,
        "link_kind": link.link_kind.value,
        "anchor_text": link.anchor_text,
        "position": link.position.value,
        "external_host": link.external_host,
    }


def report_to_dict(report: LinkReport) -> Dict[str, Any]:
    return {
        "origin": report.origin.base,
        "summary": summary_to_dict(report.summary),
        "links": [link_to_dict(ln) for ln in report.links],
        "skipped_anchors": report.skipped_anchors,
        "parse_issues": report.parse_issues,
    }
