"""Court search filters.

Filtering is case-insensitive substring matching, applied after the courts
are loaded: sport against the court's sport tag, location against address,
city, state and establishment name.
"""

from collections.abc import Iterable

from vestiario.models.venue import Court


def _contains(value: str | None, needle: str) -> bool:
    return bool(value) and needle in value.lower()


def matches_sport(court: Court, sport: str) -> bool:
    return _contains(court.sport, sport.lower())


def matches_location(court: Court, location: str) -> bool:
    needle = location.lower()
    return any(
        _contains(field, needle) for field in (court.address, court.city, court.state, court.establishment_name)
    )


def filter_courts(courts: Iterable[Court], sport: str | None = None, location: str | None = None) -> list[Court]:
    """Apply the sport and location filters, newest court first."""
    result = list(courts)
    if sport:
        result = [c for c in result if matches_sport(c, sport)]
    if location:
        result = [c for c in result if matches_location(c, location)]
    return sorted(result, key=lambda c: (c.created_at, c.id), reverse=True)
