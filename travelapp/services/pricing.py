import math
from datetime import datetime, timezone

SECONDS_PER_DAY = 24 * 60 * 60


def to_naive_utc(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; aware input is converted first."""
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def count_nights(check_in: datetime, check_out: datetime) -> int:
    """
    Number of nights between check-in and check-out, rounding partial days up.
    For plain dates this is the calendar-day difference.
    """
    delta = to_naive_utc(check_out) - to_naive_utc(check_in)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def fill_pricing(pricing: dict, nights: int) -> dict:
    """
    Completes a pricing breakdown (camelCase keys) without overriding anything
    the client sent: numberOfNights is filled from the stay and subtotal from
    pricePerNight * nights.
    """
    result = dict(pricing)
    if result.get("numberOfNights") is None:
        result["numberOfNights"] = nights
    per_night = result.get("pricePerNight")
    if result.get("subtotal") is None and per_night is not None:
        result["subtotal"] = round(per_night * result["numberOfNights"], 2)
    return result
