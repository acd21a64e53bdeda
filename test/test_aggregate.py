from __future__ import annotations

import pytest

from seo_links.aggregate import aggregate
from seo_links.api import analyze_html
from seo_links.models import (
    ClassifiedLink,
    FollowType,
    LinkKind,
    Origin,
    Position,
)

ORIGIN = Origin(scheme="https", host="example.com")


# --- helpers ---------------------------------------------------------------


def _link(
    href: str = "https://example.com/",
    *,
    internal: bool = True,
    nofollow: bool = False,
    text: str = "text",
    image: bool = False,
    position: Position = Position.BODY,
    host: str | None = None,
    https: bool = True,
    tracking: bool = False,
    blank: bool = False,
) -> ClassifiedLink:
    return ClassifiedLink(
        absolute_href=href,
        is_internal=internal,
        follow_type=FollowType.NOFOLLOW if nofollow else FollowType.DOFOLLOW,
        opens_new_tab=blank,
        is_tracking=tracking,
        is_https=https,
        is_http=not https,
        link_kind=LinkKind.IMAGE if image else LinkKind.TEXT,
        anchor_text=text,
        position=position,
        external_host=None if internal else host,
        rel="nofollow" if nofollow else "",
        target="_blank" if blank else "",
    )


def _summary(html: str):
    return analyze_html(html, ORIGIN).summary


# --- tests ----------------------------------------------------------------


def test_empty_input_is_all_zero():
    s = aggregate([])
    assert s.total_links == 0
    assert s.unique_links_count == 0
    assert s.percentage_nofollow_links == 0
    assert s.percentage_dofollow_links == 0
    assert s.link_diversity_score == 0
    assert s.average_anchor_text_length == 0
    assert s.external_domains == ()
    assert s.external_links == ()
    assert s.url_rewriting is True
    assert all(count == 0 for _, count in s.links_by_position)


def test_fragment_only_page_has_no_links():
    s = _summary('<a href="#">x</a>')
    assert s.total_links == 0
    assert s.link_diversity_score == 0


def test_root_relative_links_count_in_neither_scheme_tally():
    s = _summary('<a href="/about">About</a><a href="http://example.com/old">Old</a>')
    assert s.total_links == 2
    assert s.total_https_links == 0
    assert s.total_http_links == 1


def test_mail_and_script_links_are_not_counted():
    report = analyze_html(
        '<a href="mailto:a@b.c">m</a><a href="javascript:void(0)">j</a>', "https://example.com/"
    )
    assert report.summary.total_links == 0
    assert report.summary.total_internal_links == 0
    assert report.summary.unique_links_count == 0
    assert report.skipped_anchors == 2


def test_duplicate_hrefs_lower_diversity():
    s = _summary(
        '<a href="https://example.com/a">one</a><a href="/a">two</a>'
    )
    assert s.total_links == 2
    assert s.unique_links_count == 1
    assert s.link_diversity_score == 0.5


def test_unique_hrefs_are_case_sensitive():
    s = aggregate([_link("https://example.com/A"), _link("https://example.com/a")])
    assert s.unique_links_count == 2
    assert s.link_diversity_score == 1.0


def test_follow_percentages_round_to_two_places():
    s = aggregate([_link(nofollow=True), _link(), _link()])
    assert s.total_nofollow_links == 1
    assert s.total_dofollow_links == 2
    assert s.percentage_nofollow_links == 33.33
    assert s.percentage_dofollow_links == 66.67
    assert s.percentage_nofollow_links + s.percentage_dofollow_links == pytest.approx(100, abs=0.02)


def test_diversity_score_rounds():
    s = aggregate([_link("https://example.com/a")] * 2 + [_link("https://example.com/b")])
    assert s.link_diversity_score == 0.67


def test_average_anchor_length_only_counts_internal_text_links():
    links = [
        _link(text="About"),                     # 5, counted
        _link(text="Home page"),                 # 9, counted
        _link(text="ignored image", image=True),
        _link("https://other.com/", internal=False, host="other.com", text="a much longer external text"),
    ]
    assert aggregate(links).average_anchor_text_length == 7.0


def test_average_anchor_length_zero_without_internal_text_links():
    links = [_link("https://other.com/", internal=False, host="other.com", text="external")]
    assert aggregate(links).average_anchor_text_length == 0


def test_external_domains_are_distinct_and_ordered():
    links = [
        _link("https://b.com/1", internal=False, host="b.com"),
        _link("https://a.com/", internal=False, host="a.com"),
        _link("https://b.com/2", internal=False, host="b.com"),
        _link("https://news.b.com/", internal=False, host="news.b.com"),
    ]
    s = aggregate(links)
    assert s.external_domains == ("b.com", "a.com", "news.b.com")
    assert s.unique_external_domains_count == 3
    assert s.external_registrable_domains == ("b.com", "a.com")
    assert s.unique_external_registrable_domains_count == 2


def test_external_links_kept_individually():
    s = _summary(
        """
        <a href="https://other.com/x" rel="nofollow" target="_blank">Other</a>
        <a href="https://other.com/x">Again</a>
        <a href="/internal">In</a>
        """
    )
    assert [e.href for e in s.external_links] == ["https://other.com/x", "https://other.com/x"]
    first = s.external_links[0]
    assert first.follow_type is FollowType.NOFOLLOW
    assert first.target == "_blank"
    assert first.innertext == "Other"
    assert first.rel == "nofollow"


def test_counts_over_a_realistic_page():
    html = """
    <html><body>
      <header><a href="/"><img src="logo.png" alt="Logo"></a></header>
      <nav>
        <a href="/about">About</a>
        <a href="/blog_posts/index.php">Blog</a>
      </nav>
      <main>
        <a href="https://partner.org/?utm_source=site" target="_blank" rel="sponsored nofollow">Partner</a>
        <a href="http://old.example.net/">Legacy</a>
        <a href="relative.html"></a>
        <a href="tel:+15550100">Call</a>
      </main>
      <footer><a href="https://www.example.com/contact">Contact</a></footer>
    </body></html>
    """
    s = _summary(html)
    assert s.total_links == 7
    assert s.total_internal_links == 5
    assert s.total_external_links == 2
    assert s.total_nofollow_links == 1
    assert s.total_target_blank_links == 1
    assert s.total_image_links == 1
    assert s.total_text_links == 6
    assert s.total_empty_links == 2  # logo image and the empty relative link
    # only Partner and Contact spell out https; root-relative and relative.html count in neither
    assert s.total_https_links == 2
    assert s.total_http_links == 1
    assert s.total_tracking_links == 1
    assert s.total_non_tracking_links == 6
    assert s.external_domains == ("partner.org", "old.example.net")
    assert s.has_underscore_links is True
    assert s.url_rewriting is False
    assert s.position_counts() == {
        Position.HEADER: 1,
        Position.NAV: 2,
        Position.MAIN: 3,
        Position.FOOTER: 1,
        Position.ASIDE: 0,
        Position.SECTION: 0,
        Position.BODY: 0,
    }
    # internal text links: About, Blog, "", Contact
    assert s.average_anchor_text_length == round((5 + 4 + 0 + 7) / 4, 2)


@pytest.mark.parametrize(
    "html",
    [
        "",
        '<a href="/a">a</a><a href="/a">a</a><a href="https://x.org" rel="nofollow">x</a>',
        '<a href="https://www.example.com">w</a><a href="//cdn.example.com/a">c</a>',
        '<a href="http://[bad">b</a><a href="mailto:x@y.z">m</a>',
    ],
)
def test_summary_invariants(html):
    s = _summary(html)
    assert s.total_links == s.total_internal_links + s.total_external_links
    assert s.unique_links_count <= s.total_links
    assert s.total_text_links + s.total_image_links == s.total_links
    assert s.total_tracking_links + s.total_non_tracking_links == s.total_links
    if s.total_links:
        total = s.percentage_nofollow_links + s.percentage_dofollow_links
        assert total == pytest.approx(100, abs=0.02)
    else:
        assert s.percentage_nofollow_links == s.percentage_dofollow_links == 0
    for domain in s.external_domains:
        assert domain not in {ORIGIN.host, f"www.{ORIGIN.host}"}
