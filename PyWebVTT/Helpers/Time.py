import math

import regex

from PyWebVTT.Helpers.Localization import _

# [HH:]MM:SS.mmm - hours are optional and any width, fractions may have 2 or 3 digits
TIMESTAMP_PATTERN = regex.compile(r'(?:(\d+):)?(\d{2}):(\d{2}\.\d{2,3})')

# A timestamp at the start of a field, followed by whitespace or the end of the field
_LEADING_TIMESTAMP_PATTERN = regex.compile(r'\s*(?:(\d+):)?(\d{2}):(\d{2}\.\d{2,3})(?=\s|$)')

def IsValidTimestamp(text : str) -> bool:
    """
    Check whether text is exactly one timestamp (surrounding whitespace is ignored)
    """
    return isinstance(text, str) and TIMESTAMP_PATTERN.fullmatch(text.strip()) is not None

def ParseTimestamp(text : str) -> float:
    """
    Convert a timestamp to seconds
    """
    match = TIMESTAMP_PATTERN.fullmatch(text.strip()) if isinstance(text, str) else None
    if not match:
        raise ValueError(_("Invalid timestamp: {}").format(text))

    return _seconds_from_match(match)

def SplitLeadingTimestamp(text : str) -> tuple[float, str]|None:
    """
    Parse the timestamp at the start of text and return it in seconds along with whatever follows it, stripped.
    Returns None if text does not start with a timestamp.
    """
    match = _LEADING_TIMESTAMP_PATTERN.match(text)
    if not match:
        return None

    return _seconds_from_match(match), text[match.end():].strip()

def FormatTimestamp(seconds : float) -> str:
    """
    Format seconds as HH:MM:SS.mmm (hours grow beyond two digits if needed)
    """
    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError(_("Cannot format timestamp for {}").format(seconds))

    if seconds < 0:
        raise ValueError(_("Cannot format negative timestamp {}").format(seconds))

    # Round to a tenth of a millisecond first so float noise does not lose a whole millisecond
    total_milliseconds = math.floor(round(seconds * 1000, 1))

    hours, remainder = divmod(total_milliseconds, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    whole_seconds, milliseconds = divmod(remainder, 1000)

    return f"{hours:02d}:{minutes:02d}:{whole_seconds:02d}.{milliseconds:03d}"

def _seconds_from_match(match) -> float:
    hours, minutes, seconds = match.group(1), match.group(2), match.group(3)
    return int(hours or 0) * 3600 + int(minutes) * 60 + float(seconds)
