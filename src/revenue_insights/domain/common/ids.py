from __future__ import annotations

from dataclasses import dataclass
from typing import NewType

CustomerId = NewType("CustomerId", str)


@dataclass(frozen=True)
class CorrelationId:
    value: str
