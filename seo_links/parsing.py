# seo_links/parsing.py
"""
Lenient HTML parsing.

The link engine itself never parses; callers hand it a BeautifulSoup tree.
This module is the contract for producing that tree: best-effort structure
for any input, never an exception, plus a count of recoverable issues.
"""
from __future__ import annotations

import logging
import threading
import warnings
from dataclasses import dataclass
from typing import Union

from bs4 import BeautifulSoup, ParserRejectedMarkup

log = logging.getLogger(__name__)

PARSER = "html.parser"

# warnings.catch_warnings swaps process-wide filters, so captures must not overlap.
_WARNINGS_LOCK = threading.Lock()


@dataclass(frozen=True)
class ParsedDocument:
    soup: BeautifulSoup
    issues: int = 0


def parse_document(html: Union[str, bytes, None]) -> ParsedDocument:
    """
    Parse page source into a BeautifulSoup tree.

    Warnings raised by bs4 while parsing (markup that looks like a URL or a
    filename, undecodable bytes, ...) are counted as recoverable issues. If the
    backend rejects the markup outright, an empty document is returned with a
    single issue.

    Parsing holds a module lock while warnings are recorded, so concurrent
    calls are serialized here and each gets its own issue count. Warnings
    raised by other threads during that window are recorded too. Callers that
    need fully lock-free analysis parse themselves and use analyze_document.
    """
    with _WARNINGS_LOCK, warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        try:
            soup = BeautifulSoup(html or "", PARSER)
        except (ParserRejectedMarkup, AssertionError, ValueError) as e:
            log.warning("Markup rejected by %s, analyzing an empty document: %s", PARSER, e)
            return ParsedDocument(soup=BeautifulSoup("", PARSER), issues=1)

    issues = len(caught)
    for w in caught:
        log.debug("Recoverable parse issue: %s", w.message)
    if issues:
        log.info("Parsed document with %d recoverable issue(s).", issues)
    return ParsedDocument(soup=soup, issues=issues)
