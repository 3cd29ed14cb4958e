from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from graphon_plot.errors import PlotDataError
from graphon_plot.series import DEFAULT_LINE_COLOR, RGBA, LineData


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def series_from_xy(
    y: Any,
    *,
    x: Any = None,
    name: str = "",
    color: RGBA = DEFAULT_LINE_COLOR,
) -> LineData:
    """Build a numeric line from 1-D lists, numpy arrays, pandas Series or torch tensors.

    `x` defaults to sample indices. Pairs with a missing or non-finite value on
    either side are dropped.
    """
    ys = _float_values(y, label="y")
    xs = np.arange(ys.size, dtype=np.float64) if x is None else _float_values(x, label="x")
    if xs.size != ys.size:
        raise PlotDataError(f"x and y length mismatch: {xs.size} != {ys.size}")
    keep = np.isfinite(xs) & np.isfinite(ys)
    return LineData.from_pairs(name, list(zip(xs[keep].tolist(), ys[keep].tolist())), color=color)


def _float_values(values: Any, *, label: str) -> np.ndarray:
    if torch is not None and isinstance(values, torch.Tensor):
        values = values.detach().cpu().numpy()
    elif pd is not None and isinstance(values, pd.Series):
        values = values.to_numpy()
    elif isinstance(values, (str, bytes)) or not isinstance(values, (np.ndarray, Sequence)):
        raise PlotDataError(f"unsupported {label} input type: {type(values).__name__}")

    arr = values if isinstance(values, np.ndarray) else np.asarray(values, dtype=object)
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in "iufb":
        return arr.astype(np.float64)
    out = np.empty(arr.size, dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        try:
            out[i] = np.nan if raw is None else float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label}[{i}] is not numeric: {raw!r}") from exc
    return out
