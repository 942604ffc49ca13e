# services/time_format.py
"""
Helpers for converting between transcript time strings and seconds.
"""
import math


def to_seconds(timestamp_str: str) -> float:
    """
    Convert a marker time string to seconds.
    Format: [H:MM:SS], H:MM:SS, [M:SS] or M:SS. Anything else is 0.
    """
    clean = timestamp_str.replace("[", "").replace("]", "")
    parts = clean.split(":")

    try:
        numbers = [float(p) for p in parts]
    except ValueError:
        return 0

    if len(numbers) == 3:
        hours, minutes, seconds = numbers
        return hours * 3600 + minutes * 60 + seconds
    elif len(numbers) == 2:
        minutes, seconds = numbers
        return minutes * 60 + seconds
    return 0


def sec_to_hhmmss(sec: float) -> str:
    """Label used next to each transcript line: MM:SS, or H:MM:SS past the hour."""
    s = math.floor(sec % 60)
    m = math.floor((sec / 60) % 60)
    h = math.floor(sec / 3600)
    if h != 0:
        return f"{h}:{m:02d}:{s:02d}"
    return f"{m:02d}:{s:02d}"


def format_seconds(seconds: float) -> str:
    """Player-style duration: M:SS, or H:MM:SS past the hour."""
    hours = math.floor(seconds / 3600)
    minutes = math.floor((seconds % 3600) / 60)
    secs = math.floor(seconds % 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"
