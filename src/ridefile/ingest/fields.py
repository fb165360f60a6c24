"""
Namespace-tolerant field lookup for GPX/TCX trackpoint elements.

Exporters disagree on namespaces and prefixes for the same logical value:
Garmin writes heart rate as gpxtpx:hr, others as ns3:hr under a v2 schema, and
some tools drop the namespace entirely. Instead of ad hoc conditionals, each
logical field is a FieldChain: an ordered tuple of candidate tag paths tried in
priority order, returning the first one that yields a usable value.

A candidate path is a tuple of tag steps. Each step is either:
  - a Clark-notation tag "{namespace-uri}local", matched exactly, or
  - a bare local name "local", matched in any namespace (or none).
Each step is searched among the descendants of the previous step's match, so
("HeartRateBpm", "Value") finds <HeartRateBpm><Value>152</Value></HeartRateBpm>.
"""
import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator, Optional, Tuple
from xml.etree.ElementTree import Element

TagPath = Tuple[str, ...]


def local_name(tag: str) -> str:
    """Strip the "{uri}" namespace part from an ElementTree tag."""
    return tag.rsplit("}", 1)[-1] if tag.startswith("{") else tag


def tag_matches(tag: str, step: str) -> bool:
    if step.startswith("{"):
        return tag == step
    return local_name(tag) == step


def iter_matching(element: Element, step: str) -> Iterator[Element]:
    """Descendants of element (not element itself) whose tag matches step."""
    for child in element.iter():
        if child is element:
            continue
        if isinstance(child.tag, str) and tag_matches(child.tag, step):
            yield child


def _find_path(element: Element, path: TagPath) -> Optional[Element]:
    current = element
    for step in path:
        found = next(iter_matching(current, step), None)
        if found is None:
            return None
        current = found
    return current


def finite_or_none(value: Optional[float]) -> Optional[float]:
    """value unchanged if it is a finite float, else None."""
    if value is None or not math.isfinite(value):
        return None
    return value


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse a finite float from element text. None if absent or unusable."""
    if text is None:
        return None
    try:
        value = float(text.strip())
    except ValueError:
        return None
    return finite_or_none(value)


def parse_instant(text: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Handles the trailing "Z" both formats use. Naive timestamps are taken as
    UTC. Returns None if the text is absent or unparsable.
    """
    if not text:
        return None
    s = text.strip()
    if s.endswith(("Z", "z")):
        s = s[:-1] + "+00:00"
    try:
        instant = datetime.fromisoformat(s)
    except ValueError:
        return None
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


@dataclass(frozen=True)
class FieldChain:
    """Ordered candidate tag paths for one logical field."""

    name: str
    candidates: Tuple[TagPath, ...]

    def read_number(self, element: Element) -> Optional[float]:
        """First candidate whose text parses as a finite number."""
        for path in self.candidates:
            found = _find_path(element, path)
            if found is None:
                continue
            value = parse_number(found.text)
            if value is not None:
                return value
        return None

    def read_float(self, element: Element, default: float = 0.0) -> float:
        value = self.read_number(element)
        return default if value is None else value

    def read_instant(self, element: Element) -> Optional[datetime]:
        for path in self.candidates:
            found = _find_path(element, path)
            if found is None:
                continue
            instant = parse_instant(found.text)
            if instant is not None:
                return instant
        return None


def chain(name: str, *candidates) -> FieldChain:
    """
    Build a FieldChain; each candidate is a tag string or a tuple path.

        chain("hr", "{uri}hr", "hr")
        chain("heart_rate", ("HeartRateBpm", "Value"))
    """
    paths = tuple((c,) if isinstance(c, str) else tuple(c) for c in candidates)
    return FieldChain(name=name, candidates=paths)
