"""
QuantHub — Upload validation
----------------------------
Client-side checks run before any network call.

Each validator returns a field-keyed error map in form order; an empty map
means the submission may proceed. The first entry is the headline message.
"""

from __future__ import annotations

import math
import os
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

MB = 1024 * 1024

STRATEGY_CATEGORIES = (
    "momentum", "mean_reversion", "arbitrage", "statistical_arbitrage",
    "trend_following", "contrarian", "pairs_trading", "options", "futures",
    "crypto", "other",
)
STRATEGY_TYPES = ("discretionary", "systematic", "hybrid")
RISK_LEVELS = ("low", "medium", "high", "very_high")
TIME_HORIZONS = ("intraday", "daily", "weekly", "monthly", "long_term")

DATASET_CATEGORIES = (
    "market-data", "economic-data", "alternative-data", "sentiment-data",
    "technical-indicators", "fundamental-data", "other",
)
DATA_TYPES = (
    "price-data", "volume-data", "fundamental-data", "sentiment-data",
    "economic-indicators", "alternative-metrics", "other",
)
TIME_FRAMES = ("tick", "minute", "hourly", "daily", "weekly", "monthly", "quarterly", "yearly")

MAX_TAGS = 10
MAX_TAG_LENGTH = 20
NAME_MIN, NAME_MAX = 3, 100

_NAME_STRICT = re.compile(r"^[a-zA-Z0-9_\-\s]+$")
_NAME_DATASET = re.compile(r"^[a-zA-Z0-9_\-\s&.,()/']+$")
_TAG = re.compile(r"^[a-zA-Z0-9_\-\s]+$")


@dataclass(frozen=True)
class UploadRules:
    label: str
    extensions: Tuple[str, ...]
    max_bytes: int
    name_pattern: re.Pattern
    name_hint: str
    required: Tuple[Tuple[str, str], ...]


STRATEGY_RULES = UploadRules(
    label="strategy",
    extensions=(".py", ".ipynb"),
    max_bytes=10 * MB,
    name_pattern=_NAME_STRICT,
    name_hint="letters, numbers, hyphens, underscores, and spaces",
    required=(
        ("description", "Strategy description is required"),
        ("category", "Please select a category"),
    ),
)

DATASET_RULES = UploadRules(
    label="dataset",
    extensions=(".csv", ".json", ".xlsx", ".xls", ".txt"),
    max_bytes=50 * MB,
    name_pattern=_NAME_DATASET,
    name_hint="letters, numbers, spaces and - _ & . , ( ) / '",
    required=(
        ("description", "Dataset description is required"),
        ("category", "Please select a category"),
        ("data_type", "Please select a data type"),
        ("time_frame", "Please select a time frame"),
    ),
)


@dataclass
class UploadedFile:
    """A file picked in the browser: name, raw bytes and declared MIME type."""
    name: str
    data: bytes = field(repr=False)
    content_type: Optional[str] = None
    size: Optional[int] = None

    def __post_init__(self):
        if self.size is None:
            self.size = len(self.data)

    @property
    def extension(self) -> str:
        return os.path.splitext(self.name)[1].lower()


def parse_tags(raw: Optional[str]) -> List[str]:
    """Comma-separated tags, trimmed, empties dropped, order kept."""
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def parse_number(raw) -> Optional[float]:
    """Blank -> None; anything unparseable -> NaN (so range checks reject it)."""
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return math.nan


def validate_file(file: Optional[UploadedFile], rules: UploadRules) -> Optional[str]:
    if file is None:
        return f"Please select a {rules.label} file"
    if file.extension not in rules.extensions:
        return f"Unsupported file type. Allowed: {', '.join(rules.extensions)}"
    if file.size > rules.max_bytes:
        return f"File size must be less than {rules.max_bytes // MB}MB"
    return None


def _validate_name(name: str, rules: UploadRules) -> Optional[str]:
    label = rules.label.capitalize()
    name = (name or "").strip()
    if not name:
        return f"{label} name is required"
    if len(name) < NAME_MIN:
        return f"{label} name must be at least {NAME_MIN} characters long"
    if len(name) > NAME_MAX:
        return f"{label} name must be less than {NAME_MAX} characters"
    if not rules.name_pattern.match(name):
        return f"{label} name can only contain {rules.name_hint}"
    return None


def _validate_tags(raw: Optional[str]) -> Optional[str]:
    tags = parse_tags(raw)
    if len(tags) > MAX_TAGS:
        return f"Maximum {MAX_TAGS} tags allowed"
    for tag in tags:
        if len(tag) > MAX_TAG_LENGTH:
            return f"Each tag must be at most {MAX_TAG_LENGTH} characters"
        if not _TAG.match(tag):
            return "Tags can only contain letters, numbers, hyphens, and underscores"
    return None


def _in_range(raw, low: float, high: float) -> bool:
    value = parse_number(raw)
    return value is None or (not math.isnan(value) and low <= value <= high)


def _validate_common(form: Dict[str, object], file: Optional[UploadedFile], rules: UploadRules) -> Dict[str, str]:
    errors: Dict[str, str] = {}

    file_error = validate_file(file, rules)
    if file_error:
        errors["file"] = file_error

    name_error = _validate_name(str(form.get("name") or ""), rules)
    if name_error:
        errors["name"] = name_error

    for key, message in rules.required:
        if not str(form.get(key) or "").strip():
            errors[key] = message

    tag_error = _validate_tags(form.get("tags"))  # type: ignore[arg-type]
    if tag_error:
        errors["tags"] = tag_error
    return errors


def validate_strategy_form(form: Dict[str, object], file: Optional[UploadedFile]) -> Dict[str, str]:
    errors = _validate_common(form, file, STRATEGY_RULES)
    if not _in_range(form.get("expected_return"), -100, 1000):
        errors["expected_return"] = "Expected return must be between -100% and 1000%"
    if not _in_range(form.get("max_drawdown"), 0, 100):
        errors["max_drawdown"] = "Max drawdown must be between 0% and 100%"
    if not _in_range(form.get("minimum_capital"), 0, 1_000_000_000):
        errors["minimum_capital"] = "Minimum capital must be between $0 and $1 billion"
    return errors


def validate_dataset_form(form: Dict[str, object], file: Optional[UploadedFile]) -> Dict[str, str]:
    return _validate_common(form, file, DATASET_RULES)


def headline(errors: Dict[str, str]) -> str:
    return next(iter(errors.values()), "")
