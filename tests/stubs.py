"""Stub web3 objects standing in for a node in unit tests."""
from __future__ import annotations

import threading

from web3 import Web3


OPERATOR = "0x1111111111111111111111111111111111111111"
STRATEGY = "0x2222222222222222222222222222222222222222"
TOKEN = "0x3333333333333333333333333333333333333333"
AVS = "0x4444444444444444444444444444444444444444"
APPROVER = "0x000000000000000000000000000000000000dEaD"
STAKER = "0x5555555555555555555555555555555555555555"
SALT = b"\x01" * 32
DIGEST = b"\xab" * 32


class DummyCall:
    def __init__(self, contract, name, args):
        self._contract = contract
        self._name = name
        self._args = args

    def call(self, block_identifier=None):
        with self._contract.lock:
            self._contract.calls.append((self._name, self._args, block_identifier))
        value = self._contract.responses[self._name]
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value(*self._args)
        return value


class DummyFunctions:
    def __init__(self, contract):
        self._contract = contract

    def __getattr__(self, name):
        contract = self.__dict__["_contract"]
        if name not in contract.responses:
            raise AttributeError(name)

        def _fn(*args):
            return DummyCall(contract, name, args)

        return _fn


class DummyContract:
    def __init__(self, address="0x0000000000000000000000000000000000000001", **responses):
        self.address = address
        self.responses = responses
        self.calls = []
        self.lock = threading.Lock()
        self.functions = DummyFunctions(self)

    @property
    def call_count(self):
        return len(self.calls)


class DummyEth:
    """Hands out pre-registered contracts by address; unknown addresses get an empty contract."""

    def __init__(self, contracts=None, failures=None):
        self.contracts = {Web3.to_checksum_address(k): v for k, v in (contracts or {}).items()}
        self.failures = {Web3.to_checksum_address(k): v for k, v in (failures or {}).items()}
        self.created = []

    def contract(self, address=None, abi=None):
        self.created.append((address, abi))
        if address in self.failures:
            raise self.failures[address]
        return self.contracts.get(address) or DummyContract(address)


class DummyWeb3:
    def __init__(self, contracts=None, failures=None):
        self.eth = DummyEth(contracts, failures)


def delegation_manager(**overrides):
    responses = {
        "isOperator": True,
        "operatorDetails": ("0x0000000000000000000000000000000000000000", APPROVER, 100),
        "operatorShares": 12345678901234567890123,
        "calculateDelegationApprovalDigestHash": DIGEST,
    }
    responses.update(overrides)
    return DummyContract("0x00000000000000000000000000000000000000d1", **responses)


def slasher(**overrides):
    responses = {"contractCanSlashOperatorUntilBlock": 4_294_967_295, "isFrozen": False}
    responses.update(overrides)
    return DummyContract("0x00000000000000000000000000000000000000e1", **responses)


def avs_directory(**overrides):
    responses = {"calculateOperatorAVSRegistrationDigestHash": DIGEST}
    responses.update(overrides)
    return DummyContract("0x00000000000000000000000000000000000000a1", **responses)


def rewards_coordinator(**overrides):
    responses = {
        "getDistributionRootsLength": 42,
        "currRewardsCalculationEndTimestamp": 1_717_200_000,
        "getCurrentClaimableDistributionRoot": (b"\x07" * 32, 1_717_200_000, 1_717_300_000, False),
        "getRootIndexFromHash": 7,
        "cumulativeClaimed": 10**30,
        "checkClaim": True,
        "getOperatorAVSSplit": 1000,
    }
    responses.update(overrides)
    return DummyContract("0x00000000000000000000000000000000000000c1", **responses)


def strategy(token=TOKEN, **overrides):
    responses = {"underlyingToken": token}
    responses.update(overrides)
    return DummyContract(STRATEGY, **responses)

