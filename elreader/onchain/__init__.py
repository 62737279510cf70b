"""On-chain integration helpers."""

from elreader.onchain.bindings import ContractBindings
from elreader.onchain.reader import ChainReader
from elreader.onchain.types import DistributionRoot, Operator, RewardsMerkleClaim

__all__ = ["ChainReader", "ContractBindings", "DistributionRoot", "Operator", "RewardsMerkleClaim"]
