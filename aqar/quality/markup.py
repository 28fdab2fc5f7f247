"""
Markup Scanner

Regex tag tokenizer with an open-tag stack. Reports unclosed and unexpected
closing tags and can rebalance a fragment. Void elements and self-closing tags
are ignored; script and style bodies are skipped.

Everything HTML-structural goes through MarkupScanner so a real parser can be
dropped in later without touching the detectors.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from ..patterns import RAW_TEXT_ELEMENTS, VOID_ELEMENTS, get_defect_pattern

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TagIssue:
    """A structural problem at one tag."""
    problem: str  # "unclosed" or "unexpected-close"
    tag: str
    position: int  # Offset of the offending tag token
    token: str


class MarkupScanner:
    """
    Stack-based tag balance checker.

    Usage:
        scanner = MarkupScanner()
        issues = scanner.scan("<div><p>text</div>")
        fixed = scanner.balance("<div><p>text</div>")  # "<div><p>text</p></div>"
    """

    def __init__(self):
        self._tag_pattern = get_defect_pattern("html_tag").regex

    def _tokens(self, html: str) -> List[Tuple[re.Match, str, bool]]:
        """Tag tokens as (match, lower-cased name, is_closing), raw text bodies skipped."""
        tokens = []
        raw_text_until = None

        for match in self._tag_pattern.finditer(html):
            closing = match.group(1) == "/"
            name = match.group(2).lower()

            if raw_text_until:
                if closing and name == raw_text_until:
                    raw_text_until = None
                    tokens.append((match, name, True))
                continue

            if match.group(3) == "/" or name in VOID_ELEMENTS:
                continue

            if not closing and name in RAW_TEXT_ELEMENTS:
                raw_text_until = name

            tokens.append((match, name, closing))

        return tokens

    def _walk(self, html: str):
        """
        Run the stack over the token stream.

        Returns:
            (issues, edits) where edits are (position, remove_length, insert_text)
        """
        stack: List[Tuple[str, re.Match]] = []
        issues: List[TagIssue] = []
        edits: List[Tuple[int, int, str]] = []

        for match, name, closing in self._tokens(html):
            if not closing:
                stack.append((name, match))
                continue

            if any(open_name == name for open_name, _ in stack):
                # Closing an outer tag implicitly closes everything above it
                while stack[-1][0] != name:
                    inner_name, inner_match = stack.pop()
                    issues.append(TagIssue("unclosed", inner_name, inner_match.start(), inner_match.group(0)))
                    edits.append((match.start(), 0, f"</{inner_name}>"))
                stack.pop()
            else:
                issues.append(TagIssue("unexpected-close", name, match.start(), match.group(0)))
                edits.append((match.start(), len(match.group(0)), ""))

        trailing = ""
        while stack:
            name, match = stack.pop()
            issues.append(TagIssue("unclosed", name, match.start(), match.group(0)))
            trailing += f"</{name}>"
        if trailing:
            edits.append((len(html), 0, trailing))

        return issues, edits

    def scan(self, html: str) -> List[TagIssue]:
        """List every unclosed or unexpected tag, in document order."""
        if not html or "<" not in html:
            return []
        issues, _ = self._walk(html)
        return sorted(issues, key=lambda issue: issue.position)

    def balance(self, html: str) -> str:
        """Insert missing closing tags and drop stray ones."""
        if not html or "<" not in html:
            return html

        _, edits = self._walk(html)
        if not edits:
            return html

        pieces = []
        last = 0
        for position, remove_length, insert in edits:
            pieces.append(html[last:position])
            pieces.append(insert)
            last = position + remove_length
        pieces.append(html[last:])

        logger.debug(f"Balanced markup with {len(edits)} edits")
        return "".join(pieces)
