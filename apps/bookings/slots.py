"""
Slot grid: discretises a turf's operating window into bookable slots.

Pure functions. Nothing here touches the database except reading the
turf's courts, and nothing is cached: every call recomputes the grid.

Public API:
  expand(turf, date)               all courts, court order then time order
  expand_court(turf, court, date)  one court, time order
  slot_count(turf)                 slots per court per date
  parse_slot_time("HH:MM")
  format_slot_label(start, end)
"""
from dataclasses import dataclass, field
from datetime import date as date_type, datetime, time as time_type, timedelta


# ── Time helpers ──────────────────────────────────────────────────────────────

def _time_to_minutes(t: time_type) -> int:
    return t.hour * 60 + t.minute


def _minutes_to_time(minutes: int) -> time_type:
    return time_type(minutes // 60, minutes % 60)


def _fmt_time(t: time_type) -> str:
    """'10:00 AM' without a leading zero on the hour, on every platform."""
    hour = t.hour % 12 or 12
    ampm = 'AM' if t.hour < 12 else 'PM'
    return f"{hour}:{t.strftime('%M')} {ampm}"


def format_slot_label(start: time_type, end: time_type) -> str:
    """'10:00 AM – 11:00 AM'"""
    return f"{_fmt_time(start)} – {_fmt_time(end)}"


def parse_slot_time(value) -> time_type:
    """
    Accept a time or an 'HH:MM' string. Raises ValueError otherwise,
    including for times that carry seconds: slots start on the minute.
    """
    if isinstance(value, time_type):
        if value.second or value.microsecond or value.tzinfo is not None:
            raise ValueError(f"Slot times have no seconds or zone: {value!r}")
        return value
    if isinstance(value, str):
        return datetime.strptime(value.strip(), '%H:%M').time()
    raise ValueError(f"Not a slot time: {value!r}")


# ── Slot value ────────────────────────────────────────────────────────────────

@dataclass(frozen=True, order=True)
class Slot:
    """
    One bookable unit on a court/date. Derived, never stored.
    Identity is (turf, court, date, start); duration is carried along.
    """
    turf_id: object
    court_id: object
    date: date_type
    start: time_type
    minutes: int = field(default=60, compare=False)

    @property
    def end(self) -> time_type:
        return (datetime.combine(self.date, self.start) + timedelta(minutes=self.minutes)).time()

    @property
    def key(self) -> tuple:
        return (self.turf_id, self.court_id, self.date, self.start)

    @property
    def label(self) -> str:
        return format_slot_label(self.start, self.end)

    def as_dict(self) -> dict:
        return {
            'court': str(self.court_id),
            'date': self.date.isoformat(),
            'start': self.start.strftime('%H:%M'),
            'end': self.end.strftime('%H:%M'),
            'display': self.label,
        }


# ── Grid expansion ────────────────────────────────────────────────────────────

def _slot_starts(turf) -> list:
    """Start times that fit whole slots inside the window. Remainder dropped."""
    step = turf.slot_minutes or 0
    if step <= 0:
        return []
    start = _time_to_minutes(turf.opening_time)
    return [_minutes_to_time(start + offset) for offset in range(0, turf.window_minutes - step + 1, step)]


def slot_count(turf) -> int:
    """floor(window / granularity), per court."""
    return len(_slot_starts(turf))


def expand_court(turf, court, booking_date: date_type) -> list:
    """Chronological slots for one court. Empty for an inactive turf."""
    if not turf.is_active:
        return []
    return [
        Slot(turf.id, court.id, booking_date, start, turf.slot_minutes)
        for start in _slot_starts(turf)
    ]


def expand(turf, booking_date: date_type) -> list:
    """
    Every slot on every court of the turf for one date.
    len(result) == slot_count(turf) * number of courts.
    """
    if not turf.is_active:
        return []
    starts = _slot_starts(turf)
    return [
        Slot(turf.id, court.id, booking_date, start, turf.slot_minutes)
        for court in turf.courts.all()
        for start in starts
    ]
