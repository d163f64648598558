from typing import Optional, Tuple

MPS_TO_MPH = 2.23694
MPH_TO_MPS = 0.44704
# signed 64-bit range; anything wider is treated as unparseable
LONG_MIN = -(2 ** 63)
LONG_MAX = 2 ** 63 - 1


def to_long(raw: Optional[str], fallback: int) -> int:
    """
    Integer value of a raw token, truncating any fractional part on the text.

    "1700000000" -> 1700000000, "65.9" -> 65, "-3.7" -> -3. Absent or
    unparseable tokens return `fallback`.
    """
    if raw is None:
        return fallback
    try:
        s = raw.replace('"', "")
        dot = s.find(".")
        if dot >= 0:
            s = s[:dot]
        value = int(s.strip())
    except (AttributeError, ValueError):
        return fallback
    if not LONG_MIN <= value <= LONG_MAX:
        return fallback
    return value


def to_double(raw: Optional[str], fallback: float) -> float:
    if raw is None:
        return fallback
    try:
        return float(raw.replace('"', "").strip())
    except (AttributeError, ValueError):
        return fallback


def celsius_fahrenheit(temp: float, units: str) -> Tuple[float, float]:
    """(celsius, fahrenheit) from one canonical reading in the request's unit system."""
    if units == "imperial":
        return (temp - 32.0) * 5.0 / 9.0, temp
    return temp, temp * 9.0 / 5.0 + 32.0


def wind_source_unit(units: str, override: str = "auto") -> str:
    """
    Unit the upstream wind speed is assumed to be in.

    With "auto", metric requests are read as m/s and imperial ones as mph.
    """
    if override in ("m/s", "mph"):
        return override
    return "mph" if units == "imperial" else "m/s"


def convert_wind(value: float, source: str, target: str) -> float:
    if source == target:
        return value
    if source == "m/s" and target == "mph":
        return value * MPS_TO_MPH
    if source == "mph" and target == "m/s":
        return value * MPH_TO_MPS
    raise ValueError(f"Unsupported wind conversion: {source!r} -> {target!r}")
