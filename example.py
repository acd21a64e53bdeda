# example.py
# A small example showing how to use the seo_links library on page
# source you already have, with no network access.

import json
import logging

from seo_links import analyze_html, summary_to_dict

# Enable logging to see skipped anchors and parse diagnostics.
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

PAGE_URL = "https://example.com/"

PAGE_SOURCE = """
<html><body>
  <header><a href="/"><img src="/logo.png" alt="Example"></a></header>
  <nav>
    <a href="/products">Products</a>
    <a href="/blog">Blog</a>
  </nav>
  <main>
    <a href="https://partner.example.org/?utm_source=example" rel="sponsored nofollow" target="_blank">Our partner</a>
    <a href="https://www.example.com/contact">Contact us</a>
    <a href="tel:+15550100">Call</a>
  </main>
</body></html>
"""


def main():
    report = analyze_html(PAGE_SOURCE, PAGE_URL)
    summary = report.summary

    print(f"[*] {summary.total_links} links on {PAGE_URL}")
    print(f"    internal={summary.total_internal_links} external={summary.total_external_links}")
    print(f"    nofollow={summary.percentage_nofollow_links}% diversity={summary.link_diversity_score}")
    print(f"    skipped anchors: {report.skipped_anchors}")

    print("\n--- JSON ---")
    print(json.dumps(summary_to_dict(summary), indent=2))


if __name__ == "__main__":
    main()
