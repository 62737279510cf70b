import pytest

from elreader.onchain.reader import ChainReader

from tests.stubs import (
    STRATEGY,
    TOKEN,
    DummyContract,
    DummyWeb3,
    avs_directory,
    delegation_manager,
    rewards_coordinator,
    slasher,
    strategy,
)


@pytest.fixture()
def web3():
    return DummyWeb3(contracts={STRATEGY: strategy(), TOKEN: DummyContract(TOKEN, symbol="stETH", decimals=18)})


@pytest.fixture()
def contracts():
    return {
        "slasher": slasher(),
        "delegation_manager": delegation_manager(),
        "avs_directory": avs_directory(),
        "rewards_coordinator": rewards_coordinator(),
    }


@pytest.fixture()
def reader(web3, contracts):
    return ChainReader(web3, **contracts)


@pytest.fixture()
def empty_reader(web3):
    return ChainReader(web3)
