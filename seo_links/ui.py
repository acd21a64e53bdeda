# seo_links/ui.py
# Presentation-only utilities for CLI output.
from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Iterable, List

from seo_links.models import ExternalLink, FollowType, LinkReport


@dataclass(frozen=True)
class ExternalLinkGroup:
    href: str
    follow_type: FollowType
    innertext: str
    occurrences: int


def follow_type_css_class(follow_type: FollowType) -> str:
    return "passedBox" if follow_type is FollowType.DOFOLLOW else "improveBox"


def group_external_links(links: Iterable[ExternalLink]) -> List[ExternalLinkGroup]:
    """
    Collapse duplicate external hrefs, keeping the first occurrence's
    follow type and text, in first-seen order.
    """
    first: dict[str, ExternalLink] = {}
    counts: dict[str, int] = {}
    for link in links:
        first.setdefault(link.href, link)
        counts[link.href] = counts.get(link.href, 0) + 1
    return [
        ExternalLinkGroup(
            href=href,
            follow_type=link.follow_type,
            innertext=link.innertext,
            occurrences=counts[href],
        )
        for href, link in first.items()
    ]


def _writeln(text: str = "", *, file: IO[str]) -> None:
    file.write(text + "\n")


def render_header(url: str, *, file: IO[str]) -> None:
    _writeln(f"Analyzing links for: {url}...", file=file)


def render_summary_section(report: LinkReport, *, file: IO[str]) -> None:
    s = report.summary
    _writeln("\n--- Links ---", file=file)
    _writeln(
        f"Total: {s.total_links}  Internal: {s.total_internal_links}  "
        f"External: {s.total_external_links}  Unique: {s.unique_links_count}",
        file=file,
    )
    _writeln(
        f"Dofollow: {s.total_dofollow_links} ({s.percentage_dofollow_links}%)  "
        f"Nofollow: {s.total_nofollow_links} ({s.percentage_nofollow_links}%)",
        file=file,
    )
    _writeln(
        f"Text: {s.total_text_links}  Image: {s.total_image_links}  "
        f"Empty anchor text: {s.total_empty_links}  Target _blank: {s.total_target_blank_links}",
        file=file,
    )
    _writeln(
        f"HTTPS: {s.total_https_links}  HTTP: {s.total_http_links}  "
        f"Tracking: {s.total_tracking_links}",
        file=file,
    )
    _writeln(
        f"Diversity score: {s.link_diversity_score}  "
        f"Average internal anchor length: {s.average_anchor_text_length}",
        file=file,
    )
    _writeln(
        f"External domains: {s.unique_external_domains_count} "
        f"({s.unique_external_registrable_domains_count} registrable)",
        file=file,
    )
    if s.has_underscore_links:
        _writeln("Warning: internal URLs contain underscores.", file=file)
    if not s.url_rewriting:
        _writeln("Warning: internal URLs expose file extensions (no URL rewriting).", file=file)


def render_position_section(report: LinkReport, *, file: IO[str]) -> None:
    if not report.summary.total_links:
        return
    _writeln("\n--- Links by Position ---", file=file)
    for position, count in report.summary.links_by_position:
        if count:
            _writeln(f"- {position.value:<8} {count}", file=file)


def render_external_section(report: LinkReport, *, file: IO[str]) -> None:
    groups = group_external_links(report.summary.external_links)
    if not groups:
        return
    _writeln("\n--- External Links ---", file=file)
    for g in groups:
        label = g.innertext or g.href
        _writeln(
            f"- [{g.follow_type.value:<8}] x{g.occurrences} {g.href}  ({label})",
            file=file,
        )


def render_diagnostics_section(report: LinkReport, *, file: IO[str]) -> None:
    if not report.skipped_anchors and not report.parse_issues:
        return
    _writeln("\n--- Diagnostics ---", file=file)
    _writeln(f"- skipped anchors: {report.skipped_anchors}", file=file)
    _writeln(f"- recoverable parse issues: {report.parse_issues}", file=file)
