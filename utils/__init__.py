"""Utility modules for cross-cutting concerns."""

from utils.timezone import now_utc, today_iso
from utils.numbers import parse_decimal, round_money, fraction_to_percentage
