import logging

import pytest
from pydantic import ValidationError
from web3 import Web3

from elreader.config import ZERO_ADDRESS, ReaderConfig, Settings, configure_logging

DM = "0x39053d51b77dc0d36036fc1fcc8cb819df8ef37a"
DM_CHECKSUM = Web3.to_checksum_address(DM)


def test_addresses_default_to_zero(monkeypatch) -> None:
    for name in ("DELEGATION_MANAGER_ADDRESS", "AVS_DIRECTORY_ADDRESS", "REWARDS_COORDINATOR_ADDRESS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings(_env_file=None)
    assert settings.delegation_manager_address == ZERO_ADDRESS
    assert settings.reader_config() == ReaderConfig()


def test_empty_address_falls_back_to_zero(monkeypatch) -> None:
    monkeypatch.setenv("AVS_DIRECTORY_ADDRESS", "  ")
    settings = Settings(_env_file=None)
    assert settings.avs_directory_address == ZERO_ADDRESS


def test_address_is_checksummed(monkeypatch) -> None:
    monkeypatch.setenv("DELEGATION_MANAGER_ADDRESS", DM)
    settings = Settings(_env_file=None)
    assert settings.delegation_manager_address == DM_CHECKSUM
    assert settings.reader_config().delegation_manager_address == DM_CHECKSUM


def test_invalid_address_rejected(monkeypatch) -> None:
    monkeypatch.setenv("REWARDS_COORDINATOR_ADDRESS", "0x1234")
    with pytest.raises(ValidationError):
        Settings(_env_file=None)


def test_rpc_timeout_empty_uses_default(monkeypatch) -> None:
    monkeypatch.setenv("RPC_TIMEOUT_SECONDS", "")
    settings = Settings(_env_file=None)
    assert settings.rpc_timeout_seconds == 10.0


def test_reader_config_is_frozen() -> None:
    config = ReaderConfig(delegation_manager_address=DM)
    with pytest.raises(ValidationError):
        config.delegation_manager_address = ZERO_ADDRESS


def test_log_level_normalized(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    settings = Settings(_env_file=None)
    assert settings.log_level == "DEBUG"


def test_configure_logging_sets_root_level(monkeypatch) -> None:
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", logging.WARNING)
    configure_logging("debug")
    assert root.level == logging.DEBUG
