"""Utility functions."""
import re
from typing import Optional


def leading_int(s: Optional[str]) -> Optional[int]:
    """Parse the leading integer of a cell like '12 reps' or ' 4'."""
    if not s:
        return None
    match = re.match(r"\s*(\d+)", s)
    return int(match.group(1)) if match else None


def pad2(value: int) -> str:
    return str(value).zfill(2)


def seconds_to_mm_ss(seconds: int) -> str:
    """Format a second count as 'MM:SS', rolling whole minutes over."""
    return f"{pad2(seconds // 60)}:{pad2(seconds % 60)}"


def convert_to_duration_format(duration_str: str) -> str:
    """
    Normalize a duration cell ('30s', '5 min', '1 h', '90 sec') to 'MM:SS'.

    Unparseable input yields the one-minute default.
    """
    match = re.search(r"(\d+)\s*([a-zåäö]+)", duration_str or "", re.IGNORECASE)
    if not match:
        return "01:00"

    value = int(match.group(1))
    unit = match.group(2).lower()

    if unit.startswith("min"):
        return f"{pad2(value)}:00"
    if unit.startswith("h") or unit.startswith("tun"):
        return f"{pad2(value * 60)}:00"
    if value < 60:
        return f"00:{pad2(value)}"
    return seconds_to_mm_ss(value)


def convert_to_rest_format(rest_str: str) -> str:
    return convert_to_duration_format(rest_str)
