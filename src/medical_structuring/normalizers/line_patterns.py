# src/medical_structuring/normalizers/line_patterns.py
"""
Line-pattern heuristics for prose AI responses.

Patterns are data: an ordered tuple of LinePattern(name, regex, roles),
evaluated top-to-bottom per line, first match wins. `roles` names what each
capture group holds, so adding a shape means adding a row here.

Supported shapes (examples):
    Confidence: 72% - Cardiology        (reversed, label first)
    Cardiology - Confidence: 72%        (label before the percentage)
    Migraine - 72% - Severe headache    (name, pct, description)
    Cardiology (72%)
    Cardiology - 72%  /  Cardiology: 72%  /  Cardiology 72%
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, Optional, Pattern, Sequence, Tuple
import re

from .field_profiles import fold_key

# Number with optional decimals; percentages are normalized to trailing form
_NUM = r'(\d{1,3}(?:[.,]\d+)?)'
_SEP = r'[-–—:|]'

_LEADING_MARKER = re.compile(r'^\s*(?:[-•*–]|\d+[.)])\s+')
_EMPHASIS = re.compile(r'\*\*|__|`')
_WRAPPERS = '[]{},"\''
# "%72" (Turkish) -> "72%"
_LEADING_PERCENT = re.compile(r'(?<![\d.,])%\s*(\d{1,3}(?:[.,]\d+)?)(?!\s*%)')
_LABEL_SPLIT = re.compile(r'.*' + _SEP + r'\s*(.*)$', re.DOTALL)


@dataclass(frozen=True)
class LinePattern:
    """One line shape and the record role of each capture group."""
    name: str
    regex: Pattern[str]
    roles: Tuple[str, ...]

    def match(self, line: str) -> Optional[Dict[str, str]]:
        m = self.regex.match(line)
        if not m:
            return None
        return {
            role: (m.group(index) or "").strip()
            for index, role in enumerate(self.roles, start=1)
        }


def _label_alternation(labels: Sequence[str]) -> str:
    # Longest first so "güven yüzdesi" wins over "güven"
    ordered = sorted(set(labels), key=len, reverse=True)
    return '(?:' + '|'.join(re.escape(label).replace(r'\ ', r'\s+') for label in ordered) + ')'


@lru_cache(maxsize=8)
def build_line_patterns(labels: Tuple[str, ...]) -> Tuple[LinePattern, ...]:
    """Ordered pattern table for a set of confidence-label phrases."""
    label = _label_alternation(labels) if labels else r'(?!)'
    flags = re.IGNORECASE | re.UNICODE

    return (
        LinePattern(
            "label_pct_name",
            re.compile(rf'^{label}\s*[:=]?\s*{_NUM}\s*%\s*{_SEP}\s*(.+)$', flags),
            ("confidence", "name"),
        ),
        LinePattern(
            "name_label_pct",
            re.compile(rf'^(.+?)\s*(?:{_SEP}|,|\()\s*{label}\s*[:=]?\s*{_NUM}\s*%\s*\)?$', flags),
            ("name", "confidence"),
        ),
        LinePattern(
            "name_pct_description",
            re.compile(rf'^(.+?)\s*{_SEP}\s*{_NUM}\s*%\s*{_SEP}\s*(.+)$', flags),
            ("name", "confidence", "description"),
        ),
        LinePattern(
            "name_paren_pct",
            re.compile(rf'^(.+?)\s*\(\s*{_NUM}\s*%\s*\)$', flags),
            ("name", "confidence"),
        ),
        LinePattern(
            "name_pct",
            re.compile(rf'^(.+?)\s*(?:{_SEP}\s*|\s){_NUM}\s*%$', flags),
            ("name", "confidence"),
        ),
    )


def clean_line(line: str) -> str:
    """Strip list markers, markdown emphasis, JSON wrappers and normalize '%72'."""
    text = _EMPHASIS.sub('', line).strip()
    text = _LEADING_MARKER.sub('', text)
    text = text.strip().strip(_WRAPPERS).strip()
    return _LEADING_PERCENT.sub(r'\1%', text)


def match_line(line: str, patterns: Sequence[LinePattern]) -> Optional[Dict[str, str]]:
    """Captures of the first matching pattern, keyed by role, plus 'pattern'."""
    for pattern in patterns:
        captures = pattern.match(line)
        if captures is not None:
            captures["pattern"] = pattern.name
            return captures
    return None


def _starts_with_label(text: str, labels: Sequence[str]) -> bool:
    folded = fold_key(text)
    for label in labels:
        folded_label = fold_key(label)
        if folded.startswith(folded_label):
            rest = folded[len(folded_label):]
            # "guvenlik" is a word, not the "guven" label
            if not rest or not rest[0].isalnum():
                return True
    return False


def strip_label_leak(name: str, labels: Sequence[str]) -> Optional[str]:
    """
    Guard against a confidence label captured as the entity name.

    When the name starts with a label phrase ("Güven: Kardiyoloji"), keep the
    text after the last dash/colon; None when nothing usable remains. This is
    a heuristic over reversed-pattern over-matching, not a grammar.
    """
    if not _starts_with_label(name, labels):
        return name

    m = _LABEL_SPLIT.match(name)
    if not m:
        return None
    tail = m.group(1).strip()
    if not tail or _starts_with_label(tail, labels):
        return None
    return tail


# Bullet or dash markers only; numbered lines are section headers in analyses
_BULLET = re.compile(r'^\s*[-•*–]\s+(.+)$')


def bullet_text(line: str) -> Optional[str]:
    """Item text of a bullet or dash line, None for other lines."""
    m = _BULLET.match(_EMPHASIS.sub('', line))
    if not m:
        return None
    text = m.group(1).strip()
    return text or None
