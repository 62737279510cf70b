"""Read-only access to EigenLayer core contracts."""

from elreader.context import CallContext
from elreader.onchain.reader import ChainReader
from elreader.onchain.types import Operator

__all__ = ["CallContext", "ChainReader", "Operator"]
