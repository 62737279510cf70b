"""Read operator, slashing and rewards state from the EigenLayer core contracts."""
from __future__ import annotations

import logging
import warnings
from typing import Any, Optional, Union

from web3 import Web3
from web3.contract import Contract

from elreader.config import ReaderConfig, Settings, settings as default_settings
from elreader.context import CallContext
from elreader.errors import ContractFetchError, ContractNotProvidedError
from elreader.onchain.abis import ERC20_ABI, STRATEGY_ABI
from elreader.onchain.bindings import (
    ContractBindings,
    new_bindings_from_config,
    new_eigenlayer_contract_bindings,
)
from elreader.onchain.types import (
    Bytes32Like,
    DistributionRoot,
    Operator,
    RewardsMerkleClaim,
    checksum_address,
    to_bytes32,
)

COMPONENT = "elcontracts/reader"

DELEGATION_MANAGER = "DelegationManager"
AVS_DIRECTORY = "AVSDirectory"
SLASHER = "slasher"
REWARDS_COORDINATOR = "RewardsCoordinator"


def _component_logger(
    logger: Optional[Union[logging.Logger, logging.LoggerAdapter]],
) -> logging.LoggerAdapter:
    # a nested adapter would overwrite the component tag with its own extra
    if isinstance(logger, logging.LoggerAdapter):
        return logging.LoggerAdapter(logger.logger, {**(logger.extra or {}), "component": COMPONENT})
    return logging.LoggerAdapter(logger or logging.getLogger(__name__), {"component": COMPONENT})


def _default_web3(config: Settings) -> Web3:
    return Web3(
        Web3.HTTPProvider(
            config.eth_rpc_url,
            request_kwargs={"timeout": config.rpc_timeout_seconds},
        )
    )


class ChainReader:
    """Read-only façade over the five core contracts.

    Any of the contract handles may be ``None``; accessors that need a
    missing handle raise :class:`ContractNotProvidedError` without touching
    the node. Strategy and token handles are built per call and never kept.
    """

    def __init__(
        self,
        web3: Web3,
        *,
        slasher: Optional[Contract] = None,
        delegation_manager: Optional[Contract] = None,
        strategy_manager: Optional[Contract] = None,
        avs_directory: Optional[Contract] = None,
        rewards_coordinator: Optional[Contract] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> None:
        self._web3 = web3
        self._slasher = slasher
        self._delegation_manager = delegation_manager
        self._strategy_manager = strategy_manager
        self._avs_directory = avs_directory
        self._rewards_coordinator = rewards_coordinator
        self._logger = _component_logger(logger)
        self._logger.debug("Chain reader ready, contracts wired: %s", self._wired())

    @classmethod
    def from_bindings(
        cls,
        bindings: ContractBindings,
        web3: Web3,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> "ChainReader":
        return cls(
            web3,
            slasher=bindings.slasher,
            delegation_manager=bindings.delegation_manager,
            strategy_manager=bindings.strategy_manager,
            avs_directory=bindings.avs_directory,
            rewards_coordinator=bindings.rewards_coordinator,
            logger=logger,
        )

    @classmethod
    def from_config(
        cls,
        config: ReaderConfig,
        web3: Optional[Web3] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> "ChainReader":
        web3 = web3 or _default_web3(default_settings)
        bindings = new_bindings_from_config(config, web3, logger)
        return cls.from_bindings(bindings, web3, logger)

    @classmethod
    def from_settings(
        cls,
        config: Optional[Settings] = None,
        web3: Optional[Web3] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> "ChainReader":
        config = config or default_settings
        return cls.from_config(config.reader_config(), web3 or _default_web3(config), logger)

    @classmethod
    def build(
        cls,
        delegation_manager_address: str,
        avs_directory_address: str,
        web3: Optional[Web3] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> "ChainReader":
        """Build a reader wired to the DelegationManager and AVSDirectory only.

        Deprecated: use :meth:`from_config`.
        """
        warnings.warn(
            "ChainReader.build is deprecated, use ChainReader.from_config",
            DeprecationWarning,
            stacklevel=2,
        )
        web3 = web3 or _default_web3(default_settings)
        bindings = new_eigenlayer_contract_bindings(
            delegation_manager_address, avs_directory_address, web3, logger
        )
        return cls.from_bindings(bindings, web3, logger)

    @property
    def web3(self) -> Web3:
        return self._web3

    @property
    def slasher(self) -> Optional[Contract]:
        return self._slasher

    @property
    def delegation_manager(self) -> Optional[Contract]:
        return self._delegation_manager

    @property
    def strategy_manager(self) -> Optional[Contract]:
        return self._strategy_manager

    @property
    def avs_directory(self) -> Optional[Contract]:
        return self._avs_directory

    @property
    def rewards_coordinator(self) -> Optional[Contract]:
        return self._rewards_coordinator

    def _wired(self) -> list[str]:
        handles = {
            SLASHER: self._slasher,
            DELEGATION_MANAGER: self._delegation_manager,
            "StrategyManager": self._strategy_manager,
            AVS_DIRECTORY: self._avs_directory,
            REWARDS_COORDINATOR: self._rewards_coordinator,
        }
        return [name for name, handle in handles.items() if handle is not None]

    @staticmethod
    def _require(handle: Optional[Contract], name: str) -> Contract:
        if handle is None:
            raise ContractNotProvidedError(name)
        return handle

    @staticmethod
    def _call(ctx: Optional[CallContext], fn: Any) -> Any:
        """Run one ``eth_call`` inside the caller's context.

        A context that is already done issues no call; one whose deadline
        passes while the call is in flight discards the result.
        """
        ctx = ctx or CallContext.background()
        ctx.check()
        result = fn.call(block_identifier=ctx.block_identifier)
        ctx.check()
        return result

    # Operators and delegation

    def is_operator_registered(
        self,
        operator: Union[Operator, str],
        *,
        ctx: Optional[CallContext] = None,
    ) -> bool:
        delegation_manager = self._require(self._delegation_manager, DELEGATION_MANAGER)
        address = operator.address if isinstance(operator, Operator) else operator
        return self._call(
            ctx,
            delegation_manager.functions.isOperator(checksum_address(address, "operator address")),
        )

    def get_operator_details(
        self,
        operator: Union[Operator, str],
        *,
        ctx: Optional[CallContext] = None,
    ) -> Operator:
        delegation_manager = self._require(self._delegation_manager, DELEGATION_MANAGER)
        address = operator.address if isinstance(operator, Operator) else operator
        details = self._call(
            ctx,
            delegation_manager.functions.operatorDetails(
                checksum_address(address, "operator address")
            ),
        )
        if isinstance(details, (list, tuple)):
            approver, window = details[1], details[2]
        else:
            approver, window = details["delegationApprover"], details["stakerOptOutWindowBlocks"]
        return Operator(
            address=address,
            delegation_approver_address=Web3.to_checksum_address(approver),
            staker_opt_out_window_blocks=window,
        )

    def get_operator_shares_in_strategy(
        self,
        operator_address: str,
        strategy_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> int:
        delegation_manager = self._require(self._delegation_manager, DELEGATION_MANAGER)
        return self._call(
            ctx,
            delegation_manager.functions.operatorShares(
                checksum_address(operator_address, "operator address"),
                checksum_address(strategy_address, "strategy address"),
            ),
        )

    def calculate_delegation_approval_digest_hash(
        self,
        staker: str,
        operator: str,
        delegation_approver: str,
        approver_salt: Bytes32Like,
        expiry: int,
        *,
        ctx: Optional[CallContext] = None,
    ) -> bytes:
        delegation_manager = self._require(self._delegation_manager, DELEGATION_MANAGER)
        digest = self._call(
            ctx,
            delegation_manager.functions.calculateDelegationApprovalDigestHash(
                checksum_address(staker, "staker address"),
                checksum_address(operator, "operator address"),
                checksum_address(delegation_approver, "delegation approver address"),
                to_bytes32(approver_salt, "approver salt"),
                int(expiry),
            ),
        )
        return bytes(digest)

    # Strategies and tokens

    def _strategy_contract(self, strategy_address: str) -> Contract:
        try:
            return self._web3.eth.contract(
                address=checksum_address(strategy_address, "strategy address"),
                abi=STRATEGY_ABI,
            )
        except Exception as exc:
            raise ContractFetchError("Failed to fetch strategy contract", exc) from exc

    def _underlying_token_address(
        self, strategy: Contract, ctx: Optional[CallContext]
    ) -> str:
        ctx = ctx or CallContext.background()
        ctx.check()
        try:
            token_address = strategy.functions.underlyingToken().call(
                block_identifier=ctx.block_identifier
            )
        except Exception as exc:
            raise ContractFetchError("Failed to fetch token contract", exc) from exc
        ctx.check()
        return Web3.to_checksum_address(token_address)

    def get_strategy_and_underlying_token(
        self,
        strategy_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> tuple[Contract, str]:
        strategy = self._strategy_contract(strategy_address)
        token_address = self._underlying_token_address(strategy, ctx)
        return strategy, token_address

    def get_strategy_and_underlying_erc20_token(
        self,
        strategy_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> tuple[Contract, Contract, str]:
        strategy = self._strategy_contract(strategy_address)
        token_address = self._underlying_token_address(strategy, ctx)
        try:
            token = self._web3.eth.contract(address=token_address, abi=ERC20_ABI)
        except Exception as exc:
            raise ContractFetchError("Failed to fetch token contract", exc) from exc
        return strategy, token, token_address

    # Slashing

    def service_manager_can_slash_operator_until_block(
        self,
        operator_address: str,
        service_manager_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> int:
        slasher = self._require(self._slasher, SLASHER)
        return self._call(
            ctx,
            slasher.functions.contractCanSlashOperatorUntilBlock(
                checksum_address(operator_address, "operator address"),
                checksum_address(service_manager_address, "service manager address"),
            ),
        )

    def operator_is_frozen(
        self,
        operator_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> bool:
        slasher = self._require(self._slasher, SLASHER)
        return self._call(
            ctx,
            slasher.functions.isFrozen(checksum_address(operator_address, "operator address")),
        )

    # AVS directory

    def calculate_operator_avs_registration_digest_hash(
        self,
        operator_address: str,
        avs_address: str,
        salt: Bytes32Like,
        expiry: int,
        *,
        ctx: Optional[CallContext] = None,
    ) -> bytes:
        avs_directory = self._require(self._avs_directory, AVS_DIRECTORY)
        digest = self._call(
            ctx,
            avs_directory.functions.calculateOperatorAVSRegistrationDigestHash(
                checksum_address(operator_address, "operator address"),
                checksum_address(avs_address, "avs address"),
                to_bytes32(salt, "salt"),
                int(expiry),
            ),
        )
        return bytes(digest)

    # Rewards

    def get_distribution_roots_length(self, *, ctx: Optional[CallContext] = None) -> int:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        return self._call(ctx, rewards_coordinator.functions.getDistributionRootsLength())

    def curr_rewards_calculation_end_timestamp(
        self, *, ctx: Optional[CallContext] = None
    ) -> int:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        return self._call(ctx, rewards_coordinator.functions.currRewardsCalculationEndTimestamp())

    def get_current_claimable_distribution_root(
        self, *, ctx: Optional[CallContext] = None
    ) -> DistributionRoot:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        raw = self._call(ctx, rewards_coordinator.functions.getCurrentClaimableDistributionRoot())
        return DistributionRoot.from_abi(raw)

    def get_root_index_from_hash(
        self,
        root_hash: Bytes32Like,
        *,
        ctx: Optional[CallContext] = None,
    ) -> int:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        return self._call(
            ctx,
            rewards_coordinator.functions.getRootIndexFromHash(to_bytes32(root_hash, "root hash")),
        )

    def get_cumulative_claimed(
        self,
        earner_address: str,
        token_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> int:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        return self._call(
            ctx,
            rewards_coordinator.functions.cumulativeClaimed(
                checksum_address(earner_address, "earner address"),
                checksum_address(token_address, "token address"),
            ),
        )

    def check_claim(
        self,
        claim: Union[RewardsMerkleClaim, tuple, dict],
        *,
        ctx: Optional[CallContext] = None,
    ) -> bool:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        encoded = claim.as_abi() if isinstance(claim, RewardsMerkleClaim) else claim
        return self._call(ctx, rewards_coordinator.functions.checkClaim(encoded))

    def get_operator_avs_split(
        self,
        operator_address: str,
        avs_address: str,
        *,
        ctx: Optional[CallContext] = None,
    ) -> int:
        rewards_coordinator = self._require(self._rewards_coordinator, REWARDS_COORDINATOR)
        return self._call(
            ctx,
            rewards_coordinator.functions.getOperatorAVSSplit(
                checksum_address(operator_address, "operator address"),
                checksum_address(avs_address, "avs address"),
            ),
        )
