"""
Date/time tool.

Current time, timezone conversion, date differences and parsing of
relative dates ("tomorrow", "3 days ago", "next monday").

Dependencies: langchain_core.tools, pydantic, python-dateutil, zoneinfo
System role: Generic date arithmetic tool for the chat agent
"""

import logging
import re
from datetime import datetime, timedelta, timezone as dt_timezone, tzinfo
from typing import Any, Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dateutil import parser as dateutil_parser
from dateutil.relativedelta import relativedelta
from langchain_core.tools import BaseTool, tool
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

TIMEZONE_ALIASES: dict[str, str] = {
    "est": "America/New_York",
    "edt": "America/New_York",
    "eastern": "America/New_York",
    "cst": "America/Chicago",
    "cdt": "America/Chicago",
    "central": "America/Chicago",
    "mst": "America/Denver",
    "mdt": "America/Denver",
    "mountain": "America/Denver",
    "pst": "America/Los_Angeles",
    "pdt": "America/Los_Angeles",
    "pacific": "America/Los_Angeles",
    "utc": "UTC",
    "gmt": "Europe/London",
    "bst": "Europe/London",
    "cet": "Europe/Paris",
    "cest": "Europe/Paris",
    "jst": "Asia/Tokyo",
    "ist": "Asia/Kolkata",
    "aest": "Australia/Sydney",
    "aedt": "Australia/Sydney",
}

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

_RELATIVE_RE = re.compile(r"^(in\s+)?(\d+)\s+(day|week|month|year)s?\s*(ago)?$")
_WEEKDAY_RE = re.compile(r"^(next|last)\s+(" + "|".join(WEEKDAYS) + r")$")


def resolve_timezone(name: str) -> ZoneInfo:
    """
    Resolve an IANA name or common abbreviation to a ZoneInfo.

    Raises:
        ValueError: If the timezone is unknown
    """
    resolved = TIMEZONE_ALIASES.get(name.lower(), name)
    try:
        return ZoneInfo(resolved)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValueError(f"Invalid timezone: {name}") from e


def _utc_now() -> datetime:
    return datetime.now(dt_timezone.utc)


def parse_date_input(
    value: str,
    now: datetime | None = None,
    default_tz: tzinfo = dt_timezone.utc,
) -> datetime:
    """
    Parse absolute or relative date input into an aware datetime.

    Naive absolute dates are interpreted in ``default_tz``.

    Args:
        value: e.g. "now", "tomorrow", "in 2 weeks", "3 days ago",
            "next friday", "2026-01-15T10:00:00Z", "March 3 2026"
        now: Reference time (defaults to current UTC time)
        default_tz: Zone for absolute dates without an offset

    Returns:
        datetime: Timezone-aware datetime

    Raises:
        ValueError: If the input cannot be parsed
    """
    now = now or _utc_now()
    lowered = value.lower().strip()

    if lowered in ("now", "today"):
        return now
    if lowered == "tomorrow":
        return now + timedelta(days=1)
    if lowered == "yesterday":
        return now - timedelta(days=1)

    match = _RELATIVE_RE.match(lowered)
    if match:
        in_prefix, amount, unit, ago = match.groups()
        sign = -1 if ago and not in_prefix else 1
        return now + relativedelta(**{f"{unit}s": sign * int(amount)})

    match = _WEEKDAY_RE.match(lowered)
    if match:
        direction, day_name = match.groups()
        diff = WEEKDAYS.index(day_name) - now.weekday()
        if direction == "next" and diff <= 0:
            diff += 7
        elif direction == "last" and diff >= 0:
            diff -= 7
        return now + timedelta(days=diff)

    try:
        parsed = dateutil_parser.parse(value)
    except (dateutil_parser.ParserError, OverflowError, ValueError) as e:
        raise ValueError(f'Could not parse date: "{value}"') from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=default_tz)
    return parsed


def _format_offset(moment: datetime) -> str:
    offset = moment.utcoffset() or timedelta(0)
    total_minutes = int(offset.total_seconds() // 60)
    if total_minutes == 0:
        return "GMT"
    sign = "+" if total_minutes > 0 else "-"
    hours, minutes = divmod(abs(total_minutes), 60)
    return f"GMT{sign}{hours}" + (f":{minutes:02d}" if minutes else "")


def format_datetime(moment: datetime, tz_name: str) -> dict[str, str]:
    """Describe ``moment`` in the given timezone."""
    zone = resolve_timezone(tz_name)
    local = moment.astimezone(zone)
    return {
        "iso": moment.astimezone(dt_timezone.utc).isoformat().replace("+00:00", "Z"),
        "date": f"{local:%B} {local.day}, {local.year}",
        "time": local.strftime("%I:%M:%S %p"),
        "dayOfWeek": local.strftime("%A"),
        "timezone": zone.key,
        "offset": _format_offset(local),
    }


class DateTimeInput(BaseModel):
    """Input schema for the datetime tool."""

    operation: Literal["current", "convert", "difference", "parse"] = Field(
        "current",
        description=(
            'Operation to perform: "current" for current time, "convert" for timezone '
            'conversion, "difference" for days between dates, "parse" for parsing a date string'
        ),
    )
    timezone: str = Field(
        "UTC",
        description='Timezone for the result (e.g., "America/New_York", "PST", "UTC", "Asia/Tokyo").',
    )
    date: str | None = Field(
        None,
        description='Date to parse or convert. Supports ISO format and relative terms ("tomorrow", "next Monday", "3 days ago").',
    )
    fromTimezone: str | None = Field(None, description="Source timezone for conversion (default: UTC)")
    toTimezone: str | None = Field(None, description="Target timezone for conversion")
    date1: str | None = Field(None, description="First date for difference calculation")
    date2: str | None = Field(None, description="Second date for difference calculation")


def run_datetime(
    operation: str = "current",
    timezone: str = "UTC",
    date: str | None = None,
    fromTimezone: str | None = None,
    toTimezone: str | None = None,
    date1: str | None = None,
    date2: str | None = None,
) -> dict[str, Any]:
    """Execute a datetime request, returning a result or ``{"error": ...}``."""
    try:
        if operation == "current":
            now = _utc_now()
            return {
                "operation": "current",
                **format_datetime(now, timezone),
                "unixTimestamp": int(now.timestamp()),
            }

        if operation == "convert":
            if not date:
                return {"error": "Please provide a date to convert"}
            source_tz = resolve_timezone(fromTimezone) if fromTimezone else dt_timezone.utc
            moment = parse_date_input(date, default_tz=source_tz)
            return {
                "operation": "convert",
                "input": date,
                **format_datetime(moment, toTimezone or timezone),
            }

        if operation == "difference":
            if not date1 or not date2:
                return {"error": "Please provide both date1 and date2 for difference calculation"}
            first = parse_date_input(date1)
            second = parse_date_input(date2)
            days = (second - first).total_seconds() / 86400
            return {
                "operation": "difference",
                "date1": {"input": date1, "parsed": first.isoformat()},
                "date2": {"input": date2, "parsed": second.isoformat()},
                "difference": {
                    "days": round(days, 2),
                    "weeks": round(days / 7, 2),
                    "months": round(days / 30.44, 2),
                    "years": round(days / 365.25, 2),
                },
            }

        if operation == "parse":
            if not date:
                return {"error": "Please provide a date to parse"}
            parsed = parse_date_input(date)
            return {
                "operation": "parse",
                "input": date,
                **format_datetime(parsed, timezone),
                "unixTimestamp": int(parsed.timestamp()),
            }

        return {"error": f"Unknown operation: {operation}"}
    except ValueError as e:
        logger.info("Datetime tool failed", extra={"operation": operation, "error": str(e)})
        return {"error": str(e)}


def create_datetime_tool() -> BaseTool:
    """
    Create the datetime tool.

    Returns:
        BaseTool: Async LangChain tool named "datetime"
    """

    @tool("datetime", args_schema=DateTimeInput)
    async def datetime_tool(
        operation: str = "current",
        timezone: str = "UTC",
        date: str | None = None,
        fromTimezone: str | None = None,
        toTimezone: str | None = None,
        date1: str | None = None,
        date2: str | None = None,
    ) -> dict[str, Any]:
        """Get current date/time information, convert between timezones, calculate date differences, or parse relative dates. Supports natural language inputs like "tomorrow", "next Monday", "3 days ago"."""
        return run_datetime(
            operation=operation,
            timezone=timezone,
            date=date,
            fromTimezone=fromTimezone,
            toTimezone=toTimezone,
            date1=date1,
            date2=date2,
        )

    return datetime_tool
