"""
Timeføring - Time Registration & Billing
Decimal Hours Input

Conversion between the Norwegian display form of an hours value (comma as
decimal separator) and its numeric value, plus the small controller that
backs every hours field: free typing, clamp on blur and arrow-key stepping.
"""
import math
import re
from dataclasses import dataclass, field
from typing import Optional

from app.core.config import settings


# Leading float literal, the way a browser's parseFloat reads it
_FLOAT_PREFIX = re.compile(
    r"^\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))"
)


def format_number_with_comma(num: float) -> str:
    """
    Format a number for display with a comma decimal separator.

    0 is shown as an empty field. Whole numbers are shown without a
    fractional part, e.g. 2.0 -> "2", 2.5 -> "2,5".
    """
    if num == 0:
        return ""
    if math.isinf(num):
        return "Infinity" if num > 0 else "-Infinity"
    if float(num).is_integer():
        text = str(int(num))
    else:
        text = repr(float(num))
    return text.replace(".", ",", 1)


def parse_decimal_input(value: str) -> Optional[float]:
    """
    Parse user input with either comma or dot as decimal separator.

    Returns 0 for an empty string and None when no number can be read.
    Trailing characters after a valid number are ignored ("2,5t" -> 2.5).
    """
    if value == "":
        return 0.0

    sanitized = value.replace(",", ".", 1)
    match = _FLOAT_PREFIX.match(sanitized)
    if not match:
        return None

    literal = match.group(1)
    if literal.lstrip("+-") == "Infinity":
        return -math.inf if literal.startswith("-") else math.inf
    return float(literal)


def clamp_hours(
    hours: float,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> float:
    """Clamp hours into the allowed registration range"""
    low = settings.MIN_HOURS if minimum is None else minimum
    high = settings.MAX_HOURS if maximum is None else maximum
    return max(low, min(high, hours))


@dataclass
class HoursInput:
    """
    State of one hours field.

    `hours` is the last successfully parsed value, `text` is what the user
    sees. Typing always updates `text` but only moves `hours` when the text
    parses; `blur()` repairs both.
    """
    hours: float = field(default_factory=lambda: settings.DEFAULT_HOURS)
    text: Optional[str] = None
    minimum: float = field(default_factory=lambda: settings.MIN_HOURS)
    maximum: float = field(default_factory=lambda: settings.MAX_HOURS)
    step: float = field(default_factory=lambda: settings.HOURS_STEP)

    def __post_init__(self):
        if self.text is None:
            self.text = format_number_with_comma(self.hours)

    def type(self, text: str) -> None:
        self.text = text
        parsed = parse_decimal_input(text)
        if parsed is not None:
            self.hours = parsed

    def blur(self) -> float:
        self.hours = clamp_hours(self.hours, self.minimum, self.maximum)
        self.text = format_number_with_comma(self.hours)
        return self.hours

    def set(self, hours: float) -> None:
        self.hours = hours
        self.text = format_number_with_comma(hours)

    def step_up(self) -> float:
        self.set(min(self.maximum, self.hours + self.step))
        return self.hours

    def step_down(self) -> float:
        self.set(max(self.minimum, self.hours - self.step))
        return self.hours

    def key_down(self, key: str) -> bool:
        """Arrow keys step the value; returns True when the key was handled"""
        if key == "ArrowUp":
            self.step_up()
            return True
        if key == "ArrowDown":
            self.step_down()
            return True
        return False

    def reset(self, hours: Optional[float] = None) -> None:
        self.set(settings.DEFAULT_HOURS if hours is None else hours)
