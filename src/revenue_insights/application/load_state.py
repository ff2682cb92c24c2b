from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, TypeVar, Union

T = TypeVar("T")

# Load statuses
LOADING = "loading"
READY = "ready"
FAILED = "failed"

# Failure kinds
FAILURE_TRANSPORT = "transport"
FAILURE_NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Loading:
    status: str = field(default=LOADING, init=False)


@dataclass(frozen=True)
class Ready(Generic[T]):
    data: T
    status: str = field(default=READY, init=False)


@dataclass(frozen=True)
class Failed:
    reason: str
    kind: str = FAILURE_TRANSPORT  # transport | not_found
    status: str = field(default=FAILED, init=False)


LoadState = Union[Loading, Ready, Failed]


class RequestGeneration:
    """
    Monotonic token issued per fetch.

    Only the response carrying the latest token may be applied; anything older
    belongs to a superseded request.
    """

    def __init__(self) -> None:
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest
