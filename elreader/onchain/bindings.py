"""Turn deployment addresses into web3 contract handles."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from web3 import Web3
from web3.contract import Contract

from elreader.config import ZERO_ADDRESS, ReaderConfig
from elreader.errors import BindingError
from elreader.onchain.abis import (
    AVS_DIRECTORY_ABI,
    DELEGATION_MANAGER_ABI,
    REWARDS_COORDINATOR_ABI,
    SLASHER_ABI,
    STRATEGY_MANAGER_ABI,
)
from elreader.onchain.types import checksum_address

logger = logging.getLogger(__name__)


@dataclass
class ContractBindings:
    slasher: Optional[Contract] = None
    delegation_manager: Optional[Contract] = None
    strategy_manager: Optional[Contract] = None
    avs_directory: Optional[Contract] = None
    rewards_coordinator: Optional[Contract] = None


def _is_zero(address: str) -> bool:
    return address.lower() == ZERO_ADDRESS


def _contract(web3: Web3, name: str, address: Any, abi: list[dict]) -> Contract:
    try:
        return web3.eth.contract(address=checksum_address(address, f"{name} address"), abi=abi)
    except Exception as exc:
        raise BindingError(f"Failed to create {name} contract: {exc}") from exc


def _delegation_manager_bindings(
    web3: Web3,
    delegation_manager_address: str,
    log: logging.Logger | logging.LoggerAdapter,
) -> tuple[Contract, Contract, Contract]:
    delegation_manager = _contract(
        web3, "DelegationManager", delegation_manager_address, DELEGATION_MANAGER_ABI
    )
    try:
        slasher_address = delegation_manager.functions.slasher().call()
    except Exception as exc:
        raise BindingError(f"Failed to fetch Slasher address: {exc}") from exc
    try:
        strategy_manager_address = delegation_manager.functions.strategyManager().call()
    except Exception as exc:
        raise BindingError(f"Failed to fetch StrategyManager address: {exc}") from exc
    log.debug(
        "Resolved Slasher %s and StrategyManager %s from DelegationManager %s",
        slasher_address,
        strategy_manager_address,
        delegation_manager_address,
    )
    slasher = _contract(web3, "Slasher", slasher_address, SLASHER_ABI)
    strategy_manager = _contract(
        web3, "StrategyManager", strategy_manager_address, STRATEGY_MANAGER_ABI
    )
    return delegation_manager, slasher, strategy_manager


def new_bindings_from_config(
    config: ReaderConfig,
    web3: Web3,
    logger_: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> ContractBindings:
    """Build every handle whose deployment address is set.

    The Slasher and StrategyManager addresses are read from the
    DelegationManager, so all three are skipped when it is not deployed.
    Any failure aborts the whole build.
    """
    log = logger_ or logger
    bindings = ContractBindings()

    if _is_zero(config.delegation_manager_address):
        log.info("DelegationManager address not set, skipping DelegationManager, Slasher and StrategyManager")
    else:
        (
            bindings.delegation_manager,
            bindings.slasher,
            bindings.strategy_manager,
        ) = _delegation_manager_bindings(web3, config.delegation_manager_address, log)

    if _is_zero(config.avs_directory_address):
        log.info("AVSDirectory address not set, skipping AVSDirectory")
    else:
        bindings.avs_directory = _contract(
            web3, "AVSDirectory", config.avs_directory_address, AVS_DIRECTORY_ABI
        )

    if _is_zero(config.rewards_coordinator_address):
        log.info("RewardsCoordinator address not set, skipping RewardsCoordinator")
    else:
        bindings.rewards_coordinator = _contract(
            web3, "RewardsCoordinator", config.rewards_coordinator_address, REWARDS_COORDINATOR_ABI
        )
    return bindings


def new_eigenlayer_contract_bindings(
    delegation_manager_address: str,
    avs_directory_address: str,
    web3: Web3,
    logger_: Optional[logging.Logger | logging.LoggerAdapter] = None,
) -> ContractBindings:
    """Legacy two-address build: only DelegationManager and AVSDirectory are set."""
    log = logger_ or logger
    bindings = ContractBindings(
        delegation_manager=_contract(
            web3, "DelegationManager", delegation_manager_address, DELEGATION_MANAGER_ABI
        ),
        avs_directory=_contract(web3, "AVSDirectory", avs_directory_address, AVS_DIRECTORY_ABI),
    )
    log.debug(
        "Built legacy bindings for DelegationManager %s and AVSDirectory %s",
        delegation_manager_address,
        avs_directory_address,
    )
    return bindings
