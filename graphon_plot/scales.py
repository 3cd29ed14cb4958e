from __future__ import annotations

from decimal import Decimal, InvalidOperation

import numpy as np


NICE_FRACTIONS = (1.0, 2.0, 5.0, 10.0)
_TIE_RTOL = 1e-9


def nice_step(span: float, target: int) -> float:
    """Return the value of {1, 2, 5} x 10^n closest to ``span / target``.

    Equidistant candidates resolve to the larger step, which yields fewer ticks.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if not np.isfinite(span) or span <= 0:
        raise ValueError("span must be finite and > 0")

    ideal = span / target
    base = 10.0 ** np.floor(np.log10(ideal))
    best = NICE_FRACTIONS[0] * base
    best_diff = abs(best - ideal)
    for frac in NICE_FRACTIONS[1:]:
        candidate = frac * base
        diff = abs(candidate - ideal)
        if diff < best_diff or np.isclose(diff, best_diff, rtol=_TIE_RTOL, atol=0.0):
            best = candidate
            best_diff = diff
    return float(best)


def generate_nice_ticks(vmin: float, vmax: float, target: int, step: float | None = None) -> np.ndarray:
    """Enumerate multiples of a nice step inside ``[vmin, vmax]``.

    A degenerate span yields the single value ``vmin``.
    """
    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin > vmax:
        raise ValueError("vmin must be <= vmax")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    if step is None:
        step = nice_step(vmax - vmin, target)
    elif not np.isfinite(step) or step <= 0:
        raise ValueError("step must be finite and > 0")

    eps = 1e-9
    first = int(np.ceil(vmin / step - eps))
    last = int(np.floor(vmax / step + eps))
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    # Normalize floating-point drift so values like 0.30000000000000004 become 0.3.
    # Steps finer than the rounding precision are left as exact multiples.
    decimals = _decimals_from_step(step)
    if step >= 10.0 ** -decimals:
        ticks = np.round(ticks, decimals)
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def tick_step(ticks: np.ndarray) -> float | None:
    if ticks.size < 2:
        return None
    return float(abs(ticks[1] - ticks[0]))


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (keep 30, 40 intact).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _decimals_from_step(step: float | None) -> int:
    if step is None or step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(12, decimals)
