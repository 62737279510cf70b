"""View-function ABIs for the EigenLayer core contracts."""
from __future__ import annotations


def _view(name: str, inputs: list[dict], outputs: list[dict]) -> dict:
    return {
        "inputs": inputs,
        "name": name,
        "outputs": outputs,
        "stateMutability": "view",
        "type": "function",
    }


def _arg(name: str, type_: str, internal_type: str | None = None) -> dict:
    return {"internalType": internal_type or type_, "name": name, "type": type_}


DELEGATION_MANAGER_ABI = [
    _view(
        "isOperator",
        [_arg("operator", "address")],
        [_arg("", "bool")],
    ),
    _view(
        "operatorDetails",
        [_arg("operator", "address")],
        [
            {
                "components": [
                    _arg("__deprecated_earningsReceiver", "address"),
                    _arg("delegationApprover", "address"),
                    _arg("stakerOptOutWindowBlocks", "uint32"),
                ],
                "internalType": "struct IDelegationManager.OperatorDetails",
                "name": "",
                "type": "tuple",
            }
        ],
    ),
    _view(
        "operatorShares",
        [
            _arg("operator", "address"),
            _arg("strategy", "address", "contract IStrategy"),
        ],
        [_arg("", "uint256")],
    ),
    _view(
        "calculateDelegationApprovalDigestHash",
        [
            _arg("staker", "address"),
            _arg("operator", "address"),
            _arg("_delegationApprover", "address"),
            _arg("approverSalt", "bytes32"),
            _arg("expiry", "uint256"),
        ],
        [_arg("", "bytes32")],
    ),
    _view("slasher", [], [_arg("", "address", "contract ISlasher")]),
    _view("strategyManager", [], [_arg("", "address", "contract IStrategyManager")]),
]

STRATEGY_MANAGER_ABI = [
    _view(
        "stakerStrategyShares",
        [
            _arg("staker", "address"),
            _arg("strategy", "address", "contract IStrategy"),
        ],
        [_arg("", "uint256")],
    ),
    _view(
        "strategyIsWhitelistedForDeposit",
        [_arg("strategy", "address", "contract IStrategy")],
        [_arg("", "bool")],
    ),
]

AVS_DIRECTORY_ABI = [
    _view(
        "calculateOperatorAVSRegistrationDigestHash",
        [
            _arg("operator", "address"),
            _arg("avs", "address"),
            _arg("salt", "bytes32"),
            _arg("expiry", "uint256"),
        ],
        [_arg("", "bytes32")],
    ),
]

SLASHER_ABI = [
    _view(
        "contractCanSlashOperatorUntilBlock",
        [
            _arg("operator", "address"),
            _arg("serviceContract", "address"),
        ],
        [_arg("", "uint32")],
    ),
    _view(
        "isFrozen",
        [_arg("staker", "address")],
        [_arg("", "bool")],
    ),
]

_DISTRIBUTION_ROOT = {
    "components": [
        _arg("root", "bytes32"),
        _arg("rewardsCalculationEndTimestamp", "uint32"),
        _arg("activatedAt", "uint32"),
        _arg("disabled", "bool"),
    ],
    "internalType": "struct IRewardsCoordinator.DistributionRoot",
    "name": "",
    "type": "tuple",
}

_REWARDS_MERKLE_CLAIM = {
    "components": [
        _arg("rootIndex", "uint32"),
        _arg("earnerIndex", "uint32"),
        _arg("earnerTreeProof", "bytes"),
        {
            "components": [
                _arg("earner", "address"),
                _arg("earnerTokenRoot", "bytes32"),
            ],
            "internalType": "struct IRewardsCoordinator.EarnerTreeMerkleLeaf",
            "name": "earnerLeaf",
            "type": "tuple",
        },
        _arg("tokenIndices", "uint32[]"),
        _arg("tokenTreeProofs", "bytes[]"),
        {
            "components": [
                _arg("token", "address", "contract IERC20"),
                _arg("cumulativeEarnings", "uint256"),
            ],
            "internalType": "struct IRewardsCoordinator.TokenTreeMerkleLeaf[]",
            "name": "tokenLeaves",
            "type": "tuple[]",
        },
    ],
    "internalType": "struct IRewardsCoordinator.RewardsMerkleClaim",
    "name": "claim",
    "type": "tuple",
}

REWARDS_COORDINATOR_ABI = [
    _view("getDistributionRootsLength", [], [_arg("", "uint256")]),
    _view("currRewardsCalculationEndTimestamp", [], [_arg("", "uint32")]),
    _view("getCurrentClaimableDistributionRoot", [], [_DISTRIBUTION_ROOT]),
    _view(
        "getRootIndexFromHash",
        [_arg("rootHash", "bytes32")],
        [_arg("", "uint32")],
    ),
    _view(
        "cumulativeClaimed",
        [
            _arg("earner", "address"),
            _arg("token", "address", "contract IERC20"),
        ],
        [_arg("", "uint256")],
    ),
    _view("checkClaim", [_REWARDS_MERKLE_CLAIM], [_arg("", "bool")]),
    _view(
        "getOperatorAVSSplit",
        [
            _arg("operator", "address"),
            _arg("avs", "address"),
        ],
        [_arg("", "uint16")],
    ),
]

STRATEGY_ABI = [
    _view("underlyingToken", [], [_arg("", "address", "contract IERC20")]),
    _view("totalShares", [], [_arg("", "uint256")]),
    _view(
        "sharesToUnderlyingView",
        [_arg("amountShares", "uint256")],
        [_arg("", "uint256")],
    ),
]

ERC20_ABI = [
    _view("name", [], [_arg("", "string")]),
    _view("symbol", [], [_arg("", "string")]),
    _view("decimals", [], [_arg("", "uint8")]),
    _view("totalSupply", [], [_arg("", "uint256")]),
    _view(
        "balanceOf",
        [_arg("account", "address")],
        [_arg("", "uint256")],
    ),
]
