"""
Today's schedule projection.

Turns the serialized course list written by the app into the ordered list
of courses for one weekday.

Stored format (key "courses_data"):

    ["{\"name\": \"Math\", \"classroom\": \"A101\", \"start_slot\": 3, ...}", ...]

The outer value is a JSON array and every element is itself a JSON string
holding one course object (plain objects are read as well).

Rules:
- missing value -> no courses (not an error)
- any broken element -> the whole list is rejected, never a partial list
- result is filtered to one weekday and sorted by start_slot (stable)
"""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import Any, Iterable, List, Optional

from todayschedule.model import CourseRecord, Projection, ProjectionStatus
from todayschedule.storage import KeyValueStore

logger = logging.getLogger(__name__)

COURSES_KEY = "courses_data"


class MalformedCoursesError(ValueError):
    """Raised when the stored course list cannot be parsed completely."""


# ---------------------------------------------------------------------------
# Weekday helpers
# ---------------------------------------------------------------------------


def _check_weekday(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= 7:
        raise ValueError(f"{name} must be an integer between 1 and 7, got {value!r}")
    return value


def platform_to_domain_weekday(platform_weekday: int) -> int:
    """
    Convert a Sunday-based weekday (1=Sunday ... 7=Saturday)
    into the app's Monday-based weekday (1=Monday ... 7=Sunday).
    """
    _check_weekday(platform_weekday, "platform_weekday")
    return 7 if platform_weekday == 1 else platform_weekday - 1


def domain_weekday(day: Optional[date] = None) -> int:
    """
    Return the Monday-based weekday of a date (local today by default).
    """
    return (day or date.today()).isoweekday()


# ---------------------------------------------------------------------------
# Parsing (CORE LOGIC)
# ---------------------------------------------------------------------------


def _require_str(obj: dict, key: str, index: int) -> str:
    value = obj.get(key)
    if not isinstance(value, str):
        raise MalformedCoursesError(f"course #{index}: field {key!r} must be a string, got {value!r}")
    return value


def _require_int(obj: dict, key: str, index: int) -> int:
    value = obj.get(key)
    # bool is a subclass of int, but true/false is not a slot number
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedCoursesError(f"course #{index}: field {key!r} must be an integer, got {value!r}")
    return value


def _parse_course(element: Any, index: int) -> CourseRecord:
    # the app writes each course as a JSON string, plain objects are read as-is
    if isinstance(element, dict):
        obj = element
    elif isinstance(element, str):
        try:
            obj = json.loads(element)
        except json.JSONDecodeError as exc:
            raise MalformedCoursesError(f"course #{index}: invalid JSON ({exc.msg})") from exc
        except RecursionError as exc:
            raise MalformedCoursesError(f"course #{index}: nested too deeply") from exc
    else:
        raise MalformedCoursesError(f"course #{index}: expected an object, got {type(element).__name__}")
    if not isinstance(obj, dict):
        raise MalformedCoursesError(f"course #{index}: expected an object, got {type(obj).__name__}")

    # older app versions wrote "location" instead of "classroom"
    location_key = "classroom" if "classroom" in obj else "location"

    return CourseRecord(
        name=_require_str(obj, "name", index),
        location=_require_str(obj, location_key, index),
        start_slot=_require_int(obj, "start_slot", index),
        end_slot=_require_int(obj, "end_slot", index),
        day_of_week=_require_int(obj, "day_of_week", index),
    )


def parse_courses(raw: str) -> List[CourseRecord]:
    """
    Parse the stored course list. All-or-nothing: raises MalformedCoursesError
    as soon as the outer array or any element is broken.
    """
    try:
        data = json.loads(raw)
    except (TypeError, json.JSONDecodeError) as exc:
        raise MalformedCoursesError(f"course list is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise MalformedCoursesError("course list is nested too deeply") from exc
    if not isinstance(data, list):
        raise MalformedCoursesError(f"course list must be an array, got {type(data).__name__}")

    return [_parse_course(element, i) for i, element in enumerate(data)]


def filter_today(courses: Iterable[CourseRecord], today: int) -> List[CourseRecord]:
    """
    Keep the courses of one weekday, ordered by start_slot.
    Equal start slots keep their stored order (sorted() is stable).
    """
    return sorted((c for c in courses if c.day_of_week == today), key=lambda c: c.start_slot)


def project(raw: Optional[str], today: int) -> List[CourseRecord]:
    """
    Pure projection: stored value + weekday -> today's ordered courses.

    None means nothing was ever stored and yields an empty list.
    """
    _check_weekday(today, "today")
    if raw is None:
        return []
    return filter_today(parse_courses(raw), today)


# ---------------------------------------------------------------------------
# Store-backed projector
# ---------------------------------------------------------------------------


class Projector:
    """
    Reads the course list from an injected store on every call and
    classifies the outcome. Never raises for bad data: the caller gets
    a MALFORMED projection and shows the placeholder.
    """

    def __init__(self, store: KeyValueStore, key: str = COURSES_KEY) -> None:
        self.store = store
        self.key = key

    def project(self, today: int) -> Projection:
        _check_weekday(today, "today")
        raw = self.store.get(self.key)
        if raw is None:
            logger.debug("No stored value under %r", self.key)
            return Projection(ProjectionStatus.NO_DATA)

        try:
            courses = project(raw, today)
        except MalformedCoursesError as exc:
            logger.warning("Ignoring malformed course data under %r: %s", self.key, exc)
            return Projection(ProjectionStatus.MALFORMED)

        if not courses:
            logger.debug("No courses on weekday %s", today)
            return Projection(ProjectionStatus.EMPTY)
        return Projection(ProjectionStatus.COURSES, tuple(courses))
