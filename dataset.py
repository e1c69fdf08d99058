from __future__ import annotations

import math
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Iterable, Optional

import pandas as pd

from errors import DegenerateRangeError, EmptyDatasetError, InvalidDataError


def _check_value(key, value):
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidDataError(f"value for {key!r} is not a number: {value!r}")
    try:
        v = float(value)
    except OverflowError:
        raise InvalidDataError(f"value for {key!r} is too large: {value!r}")
    if not math.isfinite(v):
        raise InvalidDataError(f"value for {key!r} is not finite: {value!r}")
    return v


def _pairs(data, key_column, value_column):
    if isinstance(data, pd.DataFrame):
        if data.shape[1] < 2 and (key_column is None or value_column is None):
            raise InvalidDataError("DataFrame needs a key column and a value column")
        kc = key_column if key_column is not None else data.columns[0]
        vc = value_column if value_column is not None else data.columns[1]
        for col in (kc, vc):
            if col not in data.columns:
                raise InvalidDataError(f"Column '{col}' not found. Available: {list(data.columns)}")
        return list(zip(data[kc].tolist(), data[vc].tolist()))
    if isinstance(data, pd.Series):
        return list(zip(data.index.tolist(), data.tolist()))
    if isinstance(data, Mapping):
        return list(data.items())
    if isinstance(data, (str, bytes)) or not isinstance(data, Iterable):
        raise InvalidDataError(f"unsupported dataset type: {type(data).__name__}")

    pairs = []
    for item in data:
        if isinstance(item, (str, bytes)) or not isinstance(item, Iterable):
            raise InvalidDataError(f"dataset entries must be (key, value) pairs, got {item!r}")
        item = tuple(item)
        if len(item) != 2:
            raise InvalidDataError(f"dataset entries must be (key, value) pairs, got {item!r}")
        pairs.append(item)
    return pairs


def normalize_dataset(
    data: Any,
    key_column: Optional[str] = None,
    value_column: Optional[str] = None,
) -> pd.Series:
    """
    Turns a mapping, (key, value) pairs, a Series or a two-column DataFrame
    into an ordered float64 Series indexed by string keys.
    Order of the input is kept; it decides x positions.
    """
    pairs = _pairs(data, key_column, value_column)
    if not pairs:
        raise EmptyDatasetError("dataset has no points")

    keys = [str(k) for k, _ in pairs]
    values = [_check_value(k, v) for k, (_, v) in zip(keys, pairs)]
    return pd.Series(values, index=pd.Index(keys, dtype=object), dtype="float64")


@dataclass(frozen=True)
class ValueRange:
    min_value: float
    max_value: float

    @classmethod
    def of(cls, series: pd.Series) -> "ValueRange":
        if series.empty:
            raise EmptyDatasetError("dataset has no points")
        return cls(min_value=float(series.min()), max_value=float(series.max()))

    @property
    def span(self) -> float:
        return self.max_value - self.min_value

    @property
    def half_span(self) -> float:
        # max - min can overflow for finite values of opposite sign; halves cannot
        return self.max_value / 2 - self.min_value / 2

    @property
    def is_degenerate(self) -> bool:
        return self.half_span == 0

    def check(self) -> Optional[DegenerateRangeError]:
        """Returns (does not raise) the condition when all values are equal."""
        if self.is_degenerate:
            return DegenerateRangeError(f"all values equal {self.min_value:g}")
        return None
