"""Exceptions raised by the chain reader.

Failures coming back from the RPC node or from web3's ABI decoding are not
listed here: they propagate to the caller unchanged.
"""
from __future__ import annotations

from typing import Optional


class ChainReaderError(Exception):
    """Base class for errors raised by elreader itself."""


class ContractNotProvidedError(ChainReaderError):
    """The contract an accessor needs was not wired into the reader."""

    def __init__(self, contract_name: str) -> None:
        self.contract_name = contract_name
        super().__init__(f"{contract_name} contract not provided")


class ContractFetchError(ChainReaderError):
    """Building a strategy or token handle on demand failed."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        self.message = message
        self.cause = cause
        if cause is None:
            super().__init__(message)
        else:
            super().__init__(f"{message}: {cause}")


class BindingError(ChainReaderError):
    """A deployment address could not be turned into a contract handle."""


class ContextError(ChainReaderError):
    """The caller's call context is done."""


class CallCancelledError(ContextError):
    def __init__(self) -> None:
        super().__init__("context canceled")


class DeadlineExceededError(ContextError):
    def __init__(self) -> None:
        super().__init__("context deadline exceeded")
