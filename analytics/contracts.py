"""Shared metric contract for derived ratio outputs.

Rates and percentages are carried with their numerator and denominator so
tables, charts and exports agree on when a value exists. A zero denominator
yields ``UNAVAILABLE`` instead of 0, NaN or infinity.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Union


class Unavailable(Enum):
    UNAVAILABLE = "unavailable"

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable.UNAVAILABLE

MetricValue = Union[float, Unavailable]


def is_available(value: object) -> bool:
    return value is not UNAVAILABLE


@dataclass(frozen=True)
class RatioContract:
    """Canonical ratio metric: value = numerator / denominator * scale."""

    numerator: float
    denominator: float
    value: MetricValue

    @property
    def available(self) -> bool:
        return is_available(self.value)

    def as_dict(self) -> dict[str, float | bool | None]:
        return {
            "value": float(self.value) if self.available else None,
            "numerator": float(self.numerator),
            "denominator": float(self.denominator),
            "available": self.available,
        }


def ratio_contract(numerator: float, denominator: float, *, scale: float = 1.0) -> RatioContract:
    """Build a ratio contract, unavailable when the denominator is not positive."""
    num = float(numerator)
    den = float(denominator)
    if den <= 0:
        return RatioContract(numerator=num, denominator=den, value=UNAVAILABLE)
    return RatioContract(numerator=num, denominator=den, value=num / den * float(scale))


def flatten_ratio_contract(metric_name: str, contract: RatioContract) -> dict[str, float | bool | None]:
    """Flatten to stable export columns; unavailable values export as None."""
    payload = contract.as_dict()
    return {
        metric_name: payload["value"],
        f"{metric_name}_Numerator": payload["numerator"],
        f"{metric_name}_Denominator": payload["denominator"],
        f"{metric_name}_Available": payload["available"],
    }


def read_ratio_contract(row: Mapping[str, object], metric_name: str, *, scale: float = 1.0) -> RatioContract:
    """Read flattened contract columns back into a contract."""
    numerator = float(row.get(f"{metric_name}_Numerator", 0.0) or 0.0)
    denominator = float(row.get(f"{metric_name}_Denominator", 0.0) or 0.0)
    return ratio_contract(numerator, denominator, scale=scale)
