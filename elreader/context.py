"""Caller-owned scope for remote reads."""
from __future__ import annotations

import threading
import time
from typing import Optional, Union

from elreader.errors import CallCancelledError, DeadlineExceededError

BlockIdentifier = Union[int, str, bytes]


class CallContext:
    """Cancellation flag, optional deadline and block tag for contract calls.

    One context may be shared by many concurrent calls; cancelling it fails
    every call that has not completed yet. The deadline is measured on the
    monotonic clock.

    The reader checks the context right before and right after each
    ``eth_call``; it cannot interrupt a request already in flight. A hung
    node is bounded by the provider timeout (``rpc_timeout_seconds``), not by
    the deadline, so keep that timeout no longer than the shortest deadline
    callers use.
    """

    def __init__(
        self,
        deadline: Optional[float] = None,
        block_identifier: BlockIdentifier = "latest",
    ) -> None:
        self.deadline = deadline
        self.block_identifier = block_identifier
        self._cancelled = threading.Event()

    @classmethod
    def background(cls, block_identifier: BlockIdentifier = "latest") -> "CallContext":
        return cls(block_identifier=block_identifier)

    @classmethod
    def with_timeout(
        cls,
        seconds: float,
        block_identifier: BlockIdentifier = "latest",
    ) -> "CallContext":
        return cls(deadline=time.monotonic() + seconds, block_identifier=block_identifier)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def deadline_exceeded(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        if self.deadline is None:
            return None
        return max(self.deadline - time.monotonic(), 0.0)

    def check(self) -> None:
        if self.cancelled:
            raise CallCancelledError()
        if self.deadline_exceeded:
            raise DeadlineExceededError()

    def __repr__(self) -> str:
        return (
            f"CallContext(block_identifier={self.block_identifier!r}, "
            f"remaining={self.remaining()!r}, cancelled={self.cancelled})"
        )
