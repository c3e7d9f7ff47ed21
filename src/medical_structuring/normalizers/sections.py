# src/medical_structuring/normalizers/sections.py
"""
Prose helpers for analysis-style responses.

- Markdown emphasis stripping
- Splitting numbered analyses ("1) Abnormal values") into sections
- Bullet/numbered item extraction (remedies)
- Keyword line selection (medications, natural solutions)
"""

from dataclasses import dataclass, field
from typing import List, Sequence
import re

_HEADER = re.compile(r'^\s*(\d+)[).]\s*(.+)$')
_ITEM_MARKER = re.compile(r'^(?:[•\-*–]|\d+[.)]\s)')
_ITEM_PREFIX = re.compile(r'^(?:[•\-*–]|\d+[.)])\s*')


@dataclass
class AnalysisSection:
    """A titled block of an analysis; title is empty for leading text."""
    title: str
    lines: List[str] = field(default_factory=list)


def strip_emphasis(text: str) -> str:
    """Drop markdown bold/italic markers, keep numbering intact."""
    return text.replace("**", "").replace("*", "").strip()


def parse_analysis_sections(text: str) -> List[AnalysisSection]:
    """
    Split an analysis into sections on numbered headers ("1)" or "1.").

    Lines before the first header form an untitled section. Blank lines are
    dropped.
    """
    sections: List[AnalysisSection] = []
    title = None
    lines: List[str] = []

    def flush():
        if title is not None:
            sections.append(AnalysisSection(title=title, lines=list(lines)))
        elif lines:
            sections.append(AnalysisSection(title="", lines=list(lines)))

    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue

        match = _HEADER.match(line)
        if match:
            flush()
            title = match.group(2).strip()
            lines = []
            continue

        lines.append(line)

    flush()
    return sections


def extract_list_items(text: str) -> List[str]:
    """
    Bullet, dash or numbered items with their markers removed.

    Falls back to the whole (stripped) text when the response has no list.
    """
    items = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line or not _ITEM_MARKER.match(line):
            continue
        cleaned = _ITEM_PREFIX.sub('', line).strip()
        if cleaned:
            items.append(cleaned)

    if items:
        return items
    stripped = text.strip()
    return [stripped] if stripped else []


def extract_keyword_lines(text: str, keywords: Sequence[str]) -> List[str]:
    """Lines mentioning any keyword (case-insensitive)."""
    folded_keywords = [k.casefold() for k in keywords]
    selected = []
    for raw in text.splitlines():
        line = raw.strip()
        if line and any(k in line.casefold() for k in folded_keywords):
            selected.append(line)
    return selected
