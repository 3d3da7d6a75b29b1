from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from numbers import Real
from typing import Final

from dateutil import parser as dateparser

CHANGE_FREQUENCY_ALWAYS: Final = "always"
CHANGE_FREQUENCY_HOURLY: Final = "hourly"
CHANGE_FREQUENCY_DAILY: Final = "daily"
CHANGE_FREQUENCY_WEEKLY: Final = "weekly"
CHANGE_FREQUENCY_MONTHLY: Final = "monthly"
CHANGE_FREQUENCY_YEARLY: Final = "yearly"
CHANGE_FREQUENCY_NEVER: Final = "never"

CHANGE_FREQUENCIES: Final[frozenset[str]] = frozenset(
    {
        CHANGE_FREQUENCY_ALWAYS,
        CHANGE_FREQUENCY_HOURLY,
        CHANGE_FREQUENCY_DAILY,
        CHANGE_FREQUENCY_WEEKLY,
        CHANGE_FREQUENCY_MONTHLY,
        CHANGE_FREQUENCY_YEARLY,
        CHANGE_FREQUENCY_NEVER,
    }
)

_W3C_DATE_RE = re.compile(r"^[1-2][0-9]{3}-(0[1-9]|1[0-2])-(0[1-9]|[12][0-9]|3[01])$")

# dateutil fills missing fields from its default; two defaults that differ in
# year, month and day expose input that lacks any of them.
_PARSE_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def normalize_lastmod(value: str | date | None) -> str | None:
    """Return ``value`` as a W3C ``YYYY-MM-DD`` date.

    Strings already in that form are kept verbatim, anything else is parsed as a
    free-form date/time expression that has to name a year, month and day.
    """
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime("%Y-%m-%d")
    if not isinstance(value, str):
        raise ValueError(f"Invalid lastmod: {value!r}")
    if _W3C_DATE_RE.match(value):
        return value
    try:
        first, second = (dateparser.parse(value, default=d) for d in _PARSE_DEFAULTS)
    except (ValueError, OverflowError) as exc:
        raise ValueError(f"Invalid lastmod: {value!r}") from exc
    if first.date() != second.date():
        raise ValueError(f"Incomplete lastmod, a full date is required: {value!r}")
    return first.strftime("%Y-%m-%d")


def _validate_location(value: object, *, label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(
            f"{label} can't be empty, a full URL address is required (got {value!r})"
        )
    return value


def _validate_changefreq(value: object) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str) or value not in CHANGE_FREQUENCIES:
        allowed = ", ".join(sorted(CHANGE_FREQUENCIES))
        raise ValueError(f"Invalid changefreq: {value!r} (expected one of {allowed})")
    return value


def _validate_priority(value: object) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Invalid priority: {value!r}")
    if isinstance(value, (Real, Decimal)):
        priority = float(value)
    elif isinstance(value, str):
        try:
            priority = float(value.strip())
        except ValueError:
            raise ValueError(
                f"Invalid priority: {value!r} (expected a number in 0.0-1.0)"
            ) from None
    else:
        raise ValueError(f"Invalid priority: {value!r} (expected a number in 0.0-1.0)")

    if not 0.0 <= priority <= 1.0:
        raise ValueError(f"Priority out of interval 0.0-1.0: {value!r}")
    return priority


@dataclass(frozen=True)
class UrlRecord:
    """One ``<url>`` entry of a sitemap.

    ``location`` is stored unescaped; escaping happens when the record is
    rendered. Use ``dataclasses.replace`` to derive a modified record, which
    validates the new values again.
    """

    location: str
    lastmod: str | None = None
    changefreq: str | None = None
    priority: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "location", _validate_location(self.location, label="Location"))
        object.__setattr__(self, "lastmod", normalize_lastmod(self.lastmod))
        object.__setattr__(self, "changefreq", _validate_changefreq(self.changefreq))
        object.__setattr__(self, "priority", _validate_priority(self.priority))

    def as_dict(self) -> dict[str, object]:
        return {
            "loc": self.location,
            "lastmod": self.lastmod,
            "changefreq": self.changefreq,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class SitemapReference:
    """One ``<sitemap>`` entry of a sitemap index."""

    location: str
    lastmod: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "location", _validate_location(self.location, label="Sitemap location")
        )
        object.__setattr__(self, "lastmod", normalize_lastmod(self.lastmod))

    def as_dict(self) -> dict[str, object]:
        return {"loc": self.location, "lastmod": self.lastmod}
