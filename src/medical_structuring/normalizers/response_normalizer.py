# src/medical_structuring/normalizers/response_normalizer.py
"""
Tiered normalization of free-text AI responses into typed records.

Strategy cascade (first strategy yielding at least one record wins):
1. Primary schema    - JSON array decoded with the profile's canonical keys
2. Alternate schema  - same array, alternate keys
3. Localized schema  - same array, localized (Turkish) key synonyms
4. Line patterns     - regex shapes per line ("Kardiyoloji - 78%", ...)
5. Bullet fallback   - bullet/dash lines, confidence 0

A strategy that yields nothing is a silent miss; when every strategy misses
the result is an empty list, never an exception.
"""

from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union
import logging

from .confidence import parse_confidence
from .field_profiles import (
    DEFAULT_PROFILES,
    FieldKeys,
    FieldNameProfile,
    RecordShape,
    lookup,
)
from .json_locator import extract_json_array
from .line_patterns import (
    LinePattern,
    bullet_text,
    build_line_patterns,
    clean_line,
    match_line,
    strip_label_leak,
)
from .records import DecodeStrategy, NormalizedRecord
from src.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ShapeLike = Union[RecordShape, FieldNameProfile]

_OPTIONAL_ROLES = ("description", "reference_range", "remedy")


class _Attempt:
    """Per-call state shared by strategies (the JSON array is decoded once)."""

    def __init__(self, raw_text: str, profile: FieldNameProfile):
        self.raw_text = raw_text
        self.profile = profile
        self._array: Optional[List[Any]] = None
        self._array_loaded = False

    @property
    def array(self) -> Optional[List[Any]]:
        if not self._array_loaded:
            self._array = extract_json_array(self.raw_text)
            self._array_loaded = True
        return self._array

    @property
    def lines(self) -> List[str]:
        return [line for line in self.raw_text.splitlines() if line.strip()]


class ResponseNormalizer:
    """
    Normalize one raw AI response against a record shape.

    Features register their FieldNameProfile here (or pass one directly to
    normalize()). Registration is per instance; there is no global state.
    """

    def __init__(self, profiles: Optional[Dict[RecordShape, FieldNameProfile]] = None):
        self.profiles: Dict[RecordShape, FieldNameProfile] = dict(profiles or DEFAULT_PROFILES)
        self.logger = logging.getLogger(__name__)

        self.strategies: Tuple[Tuple[DecodeStrategy, Callable[[_Attempt], List[NormalizedRecord]]], ...] = (
            (DecodeStrategy.PRIMARY_SCHEMA, lambda a: self._decode_schema(a, a.profile.canonical, DecodeStrategy.PRIMARY_SCHEMA)),
            (DecodeStrategy.ALTERNATE_SCHEMA, lambda a: self._decode_schema(a, a.profile.alternate, DecodeStrategy.ALTERNATE_SCHEMA)),
            (DecodeStrategy.LOCALIZED_SCHEMA, lambda a: self._decode_schema(a, a.profile.localized, DecodeStrategy.LOCALIZED_SCHEMA)),
            (DecodeStrategy.LINE_PATTERN, self._decode_lines),
            (DecodeStrategy.BULLET_FALLBACK, self._decode_bullets),
        )

    def register(self, profile: FieldNameProfile) -> None:
        """Register (or replace) the profile for a record shape."""
        self.profiles[profile.shape] = profile

    def resolve(self, shape: ShapeLike) -> FieldNameProfile:
        if isinstance(shape, FieldNameProfile):
            return shape
        profile = self.profiles.get(shape)
        if profile is None:
            raise ConfigurationError(f"No field-name profile registered for shape: {getattr(shape, 'value', shape)}")
        return profile

    def normalize(self, raw_text: Optional[str], shape: ShapeLike) -> List[NormalizedRecord]:
        """
        Run the strategy cascade and return the first non-empty result.

        Args:
            raw_text: The chat-completion response text
            shape: RecordShape (looked up in the registry) or a FieldNameProfile

        Returns:
            Records in response order; empty when nothing could be understood
        """
        if not raw_text or not raw_text.strip():
            return []

        attempt = _Attempt(raw_text, self.resolve(shape))

        for strategy, decode in self.strategies:
            records = decode(attempt)
            if records:
                self.logger.debug(f"{strategy.value} produced {len(records)} record(s)")
                return records
            self.logger.debug(f"{strategy.value} produced no records, trying next strategy")

        self.logger.info(f"Normalization exhausted for {attempt.profile.shape.value} response")
        return []

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _decode_schema(
        self,
        attempt: _Attempt,
        keys: FieldKeys,
        strategy: DecodeStrategy
    ) -> List[NormalizedRecord]:
        items = attempt.array
        if not items:
            return []

        records = []
        for item in items:
            if not isinstance(item, dict):
                continue
            record = self._record_from_item(item, keys, strategy)
            if record is not None:
                records.append(record)
        return records

    def _record_from_item(
        self,
        item: Dict[str, Any],
        keys: FieldKeys,
        strategy: DecodeStrategy
    ) -> Optional[NormalizedRecord]:
        name = lookup(item, keys.name)
        if not isinstance(name, (str, int, float)) or isinstance(name, bool):
            return None

        confidence = parse_confidence(lookup(item, keys.confidence)) if keys.confidence else None
        if confidence is None and "confidence" in keys.required:
            return None

        optional = {}
        for role in _OPTIONAL_ROLES:
            role_keys = keys.keys_for(role)
            value = lookup(item, role_keys) if role_keys else None
            if value is None and role in keys.required:
                return None
            optional[role] = value

        return NormalizedRecord.create(
            name,
            confidence,
            strategy=strategy,
            **optional
        )

    def _decode_lines(self, attempt: _Attempt) -> List[NormalizedRecord]:
        labels = attempt.profile.confidence_labels
        patterns: Sequence[LinePattern] = build_line_patterns(tuple(labels))

        records = []
        for line in attempt.lines:
            captures = match_line(clean_line(line), patterns)
            if captures is None:
                continue

            name = strip_label_leak(captures.get("name", ""), labels)
            if name is None:
                self.logger.debug(f"Discarded label-only match: {line.strip()[:80]}")
                continue

            record = NormalizedRecord.create(
                name,
                parse_confidence(captures.get("confidence")),
                description=captures.get("description"),
                strategy=DecodeStrategy.LINE_PATTERN,
            )
            if record is not None:
                records.append(record)
        return records

    def _decode_bullets(self, attempt: _Attempt) -> List[NormalizedRecord]:
        records = []
        for line in attempt.lines:
            text = bullet_text(line)
            if text is None:
                continue
            record = NormalizedRecord.create(text, 0.0, strategy=DecodeStrategy.BULLET_FALLBACK)
            if record is not None:
                records.append(record)
        return records


_default_normalizer = ResponseNormalizer()


def normalize(raw_text: Optional[str], shape: ShapeLike) -> List[NormalizedRecord]:
    """Normalize with the default profile registry."""
    return _default_normalizer.normalize(raw_text, shape)
