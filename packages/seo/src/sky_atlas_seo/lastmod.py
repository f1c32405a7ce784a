"""``lastmod`` resolution for sitemap entries."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

DEFAULT_AGE = timedelta(days=7)
RECENT_WINDOW = timedelta(days=15)


class LastmodClock:
    """Resolves ``lastmod`` dates against a single "now" per pipeline run.

    Entries default to ``now - 7 days``. An entity updated within the last
    15 days reports its own update date instead, never later than today.
    Dates are day-precision so that a part renders byte-identically for the
    whole day.
    """

    def __init__(self, now: datetime | None = None) -> None:
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        self._now = now.astimezone(UTC)

    @property
    def now(self) -> datetime:
        return self._now

    @property
    def default(self) -> date:
        return (self._now - DEFAULT_AGE).date()

    def resolve(self, updated_at: datetime | None = None) -> date:
        if updated_at is None:
            return self.default
        if updated_at.tzinfo is None:
            updated_at = updated_at.replace(tzinfo=UTC)
        if self._now - updated_at > RECENT_WINDOW:
            return self.default
        return min(updated_at, self._now).astimezone(UTC).date()
