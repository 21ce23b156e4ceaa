from datetime import date
from typing import Optional

import dateparser
from dateutil.parser import isoparse


def parse_due_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a user-supplied due date into a calendar date.
    Handles:
      - ISO dates and datetimes (e.g., 2025-07-13, 2025-07-13T09:00)
      - Natural language (e.g., 'tomorrow', 'next Friday')
    The time of day, if any, is dropped without timezone conversion.
    Raises ValueError if the string cannot be understood.
    """
    if not date_str or not date_str.strip():
        return None
    date_str = date_str.strip()
    try:
        return isoparse(date_str).date()
    except ValueError:
        pass
    dt = dateparser.parse(date_str, settings={"PREFER_DATES_FROM": "future"})
    if dt is None:
        raise ValueError(f"Could not understand due date '{date_str}'")
    return dt.date()
