from __future__ import annotations

import json

from seo_links.api import analyze_html
from seo_links.serializer import report_to_dict, summary_to_dict, summary_to_json

HTML = """
<html><body>
  <nav><a href="/">Home</a></nav>
  <main>
    <a href="https://other.com/?utm_source=x" target="_blank"><img src="a.png"></a>
    <a href="https://other.com/read" rel="nofollow ugc">Read more</a>
  </main>
</body></html>
"""

CONSUMER_KEYS = {
    "total_links",
    "total_internal_links",
    "total_external_links",
    "unique_links_count",
    "total_nofollow_links",
    "total_dofollow_links",
    "percentage_nofollow_links",
    "percentage_dofollow_links",
    "total_target_blank_links",
    "total_image_links",
    "total_text_links",
    "total_empty_links",
    "external_domains",
    "unique_external_domains_count",
    "total_https_links",
    "total_http_links",
    "total_tracking_links",
    "total_non_tracking_links",
    "average_anchor_text_length",
    "link_diversity_score",
    "external_links",
}


def test_summary_dict_keeps_consumer_field_names():
    data = summary_to_dict(analyze_html(HTML, "https://example.com/").summary)
    assert CONSUMER_KEYS <= set(data)


def test_external_links_wire_shape():
    data = summary_to_dict(analyze_html(HTML, "https://example.com/").summary)
    assert data["external_domains"] == ["other.com"]
    assert data["external_links"] == [
        {
            "href": "https://other.com/?utm_source=x",
            "follow_type": "dofollow",
            "target": "_blank",
            "innertext": "",
            "rel": "",
        },
        {
            "href": "https://other.com/read",
            "follow_type": "nofollow",
            "target": "",
            "innertext": "Read more",
            "rel": "nofollow ugc",
        },
    ]


def test_links_by_position_has_every_region():
    data = summary_to_dict(analyze_html(HTML, "https://example.com/").summary)
    assert data["links_by_position"] == {
        "header": 0,
        "nav": 1,
        "main": 2,
        "footer": 0,
        "aside": 0,
        "section": 0,
        "body": 0,
    }


def test_json_is_deterministic_across_runs():
    first = summary_to_json(analyze_html(HTML, "https://example.com/").summary)
    second = summary_to_json(analyze_html(HTML, "https://example.com/").summary)
    assert first == second
    assert json.loads(first)["total_links"] == 3


def test_report_dict_includes_diagnostics():
    report = analyze_html(HTML + '<a href="tel:+1">call</a>', "https://example.com/")
    data = report_to_dict(report)
    assert data["origin"] == "https://example.com"
    assert data["skipped_anchors"] == 1
    assert data["parse_issues"] == 0
    assert [ln["position"] for ln in data["links"]] == ["nav", "main", "main"]
    assert data["links"][1]["link_kind"] == "image"
    assert data["links"][1]["external_host"] == "other.com"
    json.dumps(data)
