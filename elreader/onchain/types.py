"""Domain values returned by the chain reader."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from hexbytes import HexBytes
from web3 import Web3

from elreader.config import ZERO_ADDRESS

Bytes32Like = Union[bytes, bytearray, str]


def checksum_address(value: Any, label: str = "address") -> str:
    if not Web3.is_address(value):
        raise ValueError(f"Invalid {label}: {value}")
    return Web3.to_checksum_address(value)


def to_bytes32(value: Bytes32Like, label: str = "bytes32 value") -> bytes:
    """Coerce hex strings and byte strings to exactly 32 raw bytes."""
    if isinstance(value, str):
        stripped = value.strip()
        try:
            if stripped[:2].lower() == "0x":
                stripped = stripped[2:]
            raw = bytes(HexBytes("0x" + stripped))
        except ValueError as exc:
            raise ValueError(f"Invalid {label}: {value!r}") from exc
    elif isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    else:
        raise TypeError(f"{label} must be bytes or a hex string, got {type(value).__name__}")
    if len(raw) != 32:
        raise ValueError(f"{label} must be 32 bytes, got {len(raw)}")
    return raw


def _field(raw: Any, index: int, name: str) -> Any:
    if isinstance(raw, (list, tuple)):
        return raw[index]
    return raw[name]


@dataclass
class Operator:
    address: str
    delegation_approver_address: str = ""
    staker_opt_out_window_blocks: int = 0


@dataclass(frozen=True)
class DistributionRoot:
    root: bytes
    rewards_calculation_end_timestamp: int
    activated_at: int
    disabled: bool

    @classmethod
    def from_abi(cls, raw: Any) -> "DistributionRoot":
        return cls(
            root=bytes(_field(raw, 0, "root")),
            rewards_calculation_end_timestamp=int(_field(raw, 1, "rewardsCalculationEndTimestamp")),
            activated_at=int(_field(raw, 2, "activatedAt")),
            disabled=bool(_field(raw, 3, "disabled")),
        )


@dataclass(frozen=True)
class EarnerTreeMerkleLeaf:
    earner: str
    earner_token_root: bytes

    def as_abi(self) -> tuple:
        return (
            checksum_address(self.earner, "earner address"),
            to_bytes32(self.earner_token_root, "earner token root"),
        )


@dataclass(frozen=True)
class TokenTreeMerkleLeaf:
    token: str
    cumulative_earnings: int

    def as_abi(self) -> tuple:
        return (checksum_address(self.token, "token address"), int(self.cumulative_earnings))


@dataclass(frozen=True)
class RewardsMerkleClaim:
    """Merkle proof that an earner is owed cumulative token earnings."""

    root_index: int
    earner_index: int
    earner_tree_proof: bytes
    earner_leaf: EarnerTreeMerkleLeaf
    token_indices: tuple[int, ...] = field(default_factory=tuple)
    token_tree_proofs: tuple[bytes, ...] = field(default_factory=tuple)
    token_leaves: tuple[TokenTreeMerkleLeaf, ...] = field(default_factory=tuple)

    def as_abi(self) -> tuple:
        return (
            int(self.root_index),
            int(self.earner_index),
            bytes(self.earner_tree_proof),
            self.earner_leaf.as_abi(),
            [int(i) for i in self.token_indices],
            [bytes(p) for p in self.token_tree_proofs],
            [leaf.as_abi() for leaf in self.token_leaves],
        )


__all__ = [
    "ZERO_ADDRESS",
    "Operator",
    "DistributionRoot",
    "EarnerTreeMerkleLeaf",
    "TokenTreeMerkleLeaf",
    "RewardsMerkleClaim",
    "checksum_address",
    "to_bytes32",
]
