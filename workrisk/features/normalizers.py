"""
Answer Normalizers
===================
Turns raw survey answers into [0, 1] scores.

Two policies:

  - ``scale()``: integer survey scales (0-5, or 0-10 for the global stress
    rating) map linearly, clamped.  Anything that is not a number degrades
    to a default instead of failing.
  - ``CategoricalQuestion``: one ``Enum`` per question with an exhaustive
    ``{member: score}`` table.  A raw label is resolved by exact match on
    the member value/name first, then by a priority-ordered keyword
    table, and finally falls back to the question default.

Label matching is case- and accent-insensitive ("Sí" == "si") and works
on whole words, so "no" never matches inside "nunca" or "ocasionalmente".
"""

from __future__ import annotations

import math
import re
import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Sequence

from workrisk.utils.helpers import setup_logging

logger = setup_logging()

_NON_WORD = re.compile(r"[^a-z0-9]+")
_DIGIT_ALPHA = re.compile(r"(?<=\d)(?=[a-z])|(?<=[a-z])(?=\d)")


def fold(text: Any) -> str:
    """Lower-case, strip accents and punctuation, split "15cm" -> "15 cm"."""
    decomposed = unicodedata.normalize("NFKD", str(text))
    ascii_only = "".join(c for c in decomposed if not unicodedata.combining(c))
    lowered = ascii_only.lower()
    lowered = _DIGIT_ALPHA.sub(" ", lowered)
    return _NON_WORD.sub(" ", lowered).strip()


def _to_number(raw: Any) -> Optional[float]:
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        try:
            value = float(str(raw).strip().replace(",", "."))
        except ValueError:
            return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def scale(raw: Any, maximum: float = 5.0, default: float = 0.0) -> float:
    """Linear scale normalisation: ``raw / maximum`` clamped to [0, 1]."""
    value = _to_number(raw)
    if value is None:
        return default
    return max(0.0, min(1.0, value / maximum))


def mean_scale(raws: Sequence[Any], maximum: float = 5.0, default: float = 0.0) -> float:
    """Mean of several raw scale answers, then normalised."""
    values = [_to_number(r) for r in raws]
    present = [v for v in values if v is not None]
    if not present:
        return default
    return scale(sum(present) / len(present), maximum, default)


def truthy(raw: Any) -> bool:
    """Yes/no answers stored as bools, 0/1 or labels."""
    if isinstance(raw, bool):
        return raw
    number = _to_number(raw)
    if number is not None:
        return number != 0
    return fold(raw).split(" ")[:1] in (["si"], ["yes"], ["true"])


@dataclass(frozen=True)
class CategoricalQuestion:
    """A multiple-choice question with a total score table.

    ``bands`` optionally maps a numeric answer (hours, minutes, BMI...)
    onto a member before scoring.
    """

    key: str
    choices: type
    scores: Mapping[Enum, float]
    default: float
    keywords: tuple = ()
    bands: Optional[Callable[[float], Enum]] = None
    _lookup: dict = field(init=False, repr=False, compare=False)
    _folded_keywords: tuple = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        members = set(self.choices)
        missing = members - set(self.scores)
        extra = set(self.scores) - members
        if missing or extra:
            raise ValueError(
                f"{self.key}: score table must cover {self.choices.__name__} exactly "
                f"(missing={sorted(m.name for m in missing)}, extra={sorted(map(str, extra))})"
            )
        for member, score in self.scores.items():
            if not 0.0 <= score <= 1.0:
                raise ValueError(f"{self.key}: score for {member.name} outside [0, 1]")
        if not 0.0 <= self.default <= 1.0:
            raise ValueError(f"{self.key}: default outside [0, 1]")
        for _, member in self.keywords:
            if member not in members:
                raise ValueError(f"{self.key}: keyword target {member!r} is not a choice")

        lookup = {}
        for member in self.choices:
            lookup.setdefault(fold(member.value), member)
            lookup.setdefault(fold(member.name), member)
        object.__setattr__(self, "_lookup", lookup)
        object.__setattr__(
            self, "_folded_keywords",
            tuple((f" {fold(kw)} ", member) for kw, member in self.keywords),
        )

    def parse(self, raw: Any) -> Optional[Enum]:
        """Resolve a raw answer to a member, or None if nothing matches."""
        if raw is None:
            return None
        if isinstance(raw, self.choices):
            return raw
        if self.bands is not None and not isinstance(raw, bool):
            number = _to_number(raw)
            if number is not None:
                return self.bands(number)
        text = fold(raw)
        if not text:
            return None
        exact = self._lookup.get(text)
        if exact is not None:
            return exact
        padded = f" {text} "
        for keyword, member in self._folded_keywords:
            if keyword in padded:
                return member
        return None

    def score(self, raw: Any) -> float:
        member = self.parse(raw)
        if member is None:
            if raw not in (None, ""):
                logger.debug("%s: unrecognised answer %r, using default %.2f",
                             self.key, raw, self.default)
            return self.default
        return self.scores[member]

    def score_from(self, answers: Mapping[str, Any]) -> float:
        return self.score(answers.get(self.key))
