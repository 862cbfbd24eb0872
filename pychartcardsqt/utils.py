from __future__ import annotations

import numpy as np


def clamp(value: float, vmin: float = 0.0, vmax: float = 1.0) -> float:
    """Clamp numeric values to [vmin, vmax]."""
    lo = float(vmin)
    hi = float(vmax)
    if lo > hi:
        lo, hi = hi, lo

    try:
        v = float(value)
    except (TypeError, ValueError):
        return lo

    if not np.isfinite(v):
        return lo

    return float(np.clip(v, lo, hi))


def normalize(value: float, domain_min: float, domain_max: float) -> float:
    """Map ``value`` into [0, 1] relative to ``[domain_min, domain_max]``.

    A flat domain (``domain_min == domain_max``) is treated as full scale and
    always yields 1.0.
    """
    lo = float(domain_min)
    hi = float(domain_max)
    if hi == lo:
        return 1.0
    span = hi - lo
    if not np.isfinite(span):
        return 0.0
    try:
        v = float(value)
    except (TypeError, ValueError):
        return 0.0
    return clamp((v - lo) / span, 0.0, 1.0)


def safe_ratio(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide, returning ``default`` for a zero or non-finite result."""
    if denominator == 0:
        return float(default)
    r = float(numerator) / float(denominator)
    if not np.isfinite(r):
        return float(default)
    return r


def format_percentage(value: float, decimals: int = 1) -> str:
    """Format a number as a percentage label, e.g. ``12.5%``."""
    v = float(value)
    if not np.isfinite(v):
        v = 0.0
    return f"{v:.{int(decimals)}f}%"
