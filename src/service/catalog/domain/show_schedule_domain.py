"""
Show schedule parsing and grouping.

Show times are stored and presented in UTC: a slot {date: '2030-07-01', time: '18:30'}
is 2030-07-01T18:30:00Z, and listings group by the UTC calendar date.
"""

from collections import defaultdict
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Sequence

from src.platform.exception.exceptions import ValidationError
from src.service.catalog.domain.entity.show_entity import Show


def parse_show_slots(shows_input: Sequence[Dict[str, Any]]) -> List[datetime]:
    """
    Expand [{date: 'YYYY-MM-DD', time: ['HH:MM', ...] | 'HH:MM'}] into sorted,
    de-duplicated UTC datetimes.
    """
    if not shows_input:
        raise ValidationError('At least one show date and time is required')

    slots: set[datetime] = set()
    for entry in shows_input:
        raw_date = entry.get('date')
        raw_times = entry.get('time')
        if isinstance(raw_times, str):
            raw_times = [raw_times]
        if not raw_date or not raw_times:
            raise ValidationError('Each show input needs a date and at least one time')

        try:
            show_date = date.fromisoformat(str(raw_date))
        except ValueError as e:
            raise ValidationError(f'Invalid show date: {raw_date}') from e

        for raw_time in raw_times:
            try:
                # HH:MM only: no seconds, no offsets
                show_time = datetime.strptime(str(raw_time), '%H:%M').time()
            except ValueError as e:
                raise ValidationError(f'Invalid show time: {raw_time}') from e
            slots.add(datetime.combine(show_date, show_time, tzinfo=timezone.utc))

    return sorted(slots)


def group_show_times(shows: Iterable[Show]) -> Dict[str, List[Dict[str, str]]]:
    """{'YYYY-MM-DD': [{'time': 'HH:MM', 'show_id': ...}, ...]} ascending within each date"""
    grouped: Dict[str, List[Dict[str, str]]] = defaultdict(list)
    for show in sorted(shows, key=lambda s: s.show_date_time):
        start = show.show_date_time.astimezone(timezone.utc)
        grouped[start.date().isoformat()].append(
            {'time': start.strftime('%H:%M'), 'show_id': str(show.id)}
        )
    return dict(grouped)


def first_show_per_movie(shows: Iterable[Show]) -> List[Show]:
    """Earliest show of each distinct movie, in start order."""
    seen: set[str] = set()
    unique: List[Show] = []
    for show in sorted(shows, key=lambda s: s.show_date_time):
        if show.movie_id not in seen:
            seen.add(show.movie_id)
            unique.append(show)
    return unique
