"""
QuantHub — Community Aggregation
--------------------------------
Derives one summary per author from raw strategy and dataset rows.

Design
------
- Pure functions, no Supabase or Streamlit imports.
- Summaries are recomputed from rows every time; nothing is cached.
- Presentation ordering and filtering live here too, but never change the
  aggregation itself.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional

from core.formatting import parse_timestamp

AUTHOR_FIELD = "author_email"
CREATED_FIELD = "created_at"

# Marker for activity dates derived from a malformed timestamp
INVALID_DATE = "Invalid Date"

SORT_OPTIONS = ("contributions", "strategies", "datasets", "recent", "name")
FILTER_OPTIONS = ("all", "strategies", "datasets")

_SEPARATORS = re.compile(r"[._-]")
_DIGITS = re.compile(r"[0-9]")


@dataclass
class CommunityMember:
    email: str
    strategies: int = 0
    datasets: int = 0
    total_contributions: int = 0
    last_active: str = ""
    joined_date: str = ""
    display_name: str = ""

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MemberProfile:
    """A member summary together with the rows it was computed from."""
    member: CommunityMember
    strategies: List[Dict[str, Any]] = field(default_factory=list)
    datasets: List[Dict[str, Any]] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {**self.member.as_dict(), "strategy_rows": self.strategies, "dataset_rows": self.datasets}


def display_name_for(author: str) -> str:
    """
    "jane.doe42@x.com" -> "Jane Doe".

    Local-part only, digits removed, `.`/`_`/`-` become spaces, each word
    capitalised on its first character.
    """
    local = author.split("@", 1)[0]
    local = _DIGITS.sub("", local)
    local = _SEPARATORS.sub(" ", local)
    return " ".join(word[:1].upper() + word[1:] for word in local.split())


def _activity_bounds(timestamps: List[str]) -> tuple[str, str]:
    """(joined, last_active) as the original strings; malformed input poisons both."""
    if not timestamps:
        return "", ""
    parsed = [(parse_timestamp(ts), ts) for ts in timestamps]
    if any(when is None for when, _ in parsed):
        return INVALID_DATE, INVALID_DATE
    ordered = sorted(parsed, key=lambda pair: pair[0])
    return ordered[0][1], ordered[-1][1]


def aggregate_contributions(
    strategy_rows: Iterable[Mapping[str, Any]],
    dataset_rows: Iterable[Mapping[str, Any]],
) -> List[CommunityMember]:
    """One CommunityMember per distinct author of either sequence."""
    counts: Dict[str, List[int]] = {}
    dates: Dict[str, List[str]] = {}

    for slot, rows in ((0, strategy_rows), (1, dataset_rows)):
        for row in rows:
            author = row.get(AUTHOR_FIELD)
            if not author:
                continue
            counts.setdefault(author, [0, 0])[slot] += 1
            created = row.get(CREATED_FIELD)
            if created is not None:
                dates.setdefault(author, []).append(created)

    members: List[CommunityMember] = []
    for author, (n_strategies, n_datasets) in counts.items():
        joined, last = _activity_bounds(dates.get(author, []))
        members.append(
            CommunityMember(
                email=author,
                strategies=n_strategies,
                datasets=n_datasets,
                total_contributions=n_strategies + n_datasets,
                last_active=last,
                joined_date=joined,
                display_name=display_name_for(author),
            )
        )
    return members


def build_profile(
    author: str,
    strategy_rows: List[Dict[str, Any]],
    dataset_rows: List[Dict[str, Any]],
) -> MemberProfile:
    """Profile of one author from rows already filtered to that author."""
    own_strategies = [r for r in strategy_rows if r.get(AUTHOR_FIELD) == author]
    own_datasets = [r for r in dataset_rows if r.get(AUTHOR_FIELD) == author]
    found = aggregate_contributions(own_strategies, own_datasets)
    member = found[0] if found else CommunityMember(email=author, display_name=display_name_for(author))
    return MemberProfile(member=member, strategies=own_strategies, datasets=own_datasets)


# --------------------------------------------------------------------------- #
# Presentation helpers
# --------------------------------------------------------------------------- #

def _recent_key(member: CommunityMember) -> float:
    when = parse_timestamp(member.last_active)
    return when.timestamp() if when else float("-inf")


_SORT_KEYS = {
    "contributions": (lambda m: m.total_contributions, True),
    "strategies": (lambda m: m.strategies, True),
    "datasets": (lambda m: m.datasets, True),
    "recent": (_recent_key, True),
    "name": (lambda m: m.display_name.casefold(), False),
}


def sort_members(members: Iterable[CommunityMember], by: str = "contributions") -> List[CommunityMember]:
    """Stable sort; equal keys keep their incoming order."""
    if by not in _SORT_KEYS:
        raise ValueError(f"Unknown sort option '{by}'. Expected one of {SORT_OPTIONS}.")
    key, descending = _SORT_KEYS[by]
    return sorted(members, key=key, reverse=descending)


def filter_members(
    members: Iterable[CommunityMember],
    search: Optional[str] = None,
    only: str = "all",
) -> List[CommunityMember]:
    """Case-insensitive search over name/email, then creator-type filter."""
    if only not in FILTER_OPTIONS:
        raise ValueError(f"Unknown filter '{only}'. Expected one of {FILTER_OPTIONS}.")
    result = list(members)
    if search:
        term = search.lower()
        result = [m for m in result if term in m.display_name.lower() or term in m.email.lower()]
    if only == "strategies":
        result = [m for m in result if m.strategies > 0]
    elif only == "datasets":
        result = [m for m in result if m.datasets > 0]
    return result
