from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"


def _normalize_address(value):
    if value is None:
        return ZERO_ADDRESS
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return ZERO_ADDRESS
        value = stripped
    if not Web3.is_address(value):
        raise ValueError(f"Invalid contract address: {value}")
    return Web3.to_checksum_address(value)


class ReaderConfig(BaseModel):
    """Deployment addresses of the core contracts.

    A zero address means the contract is not deployed on the target chain
    and its handle is left unset on the reader.
    """

    model_config = ConfigDict(frozen=True)

    delegation_manager_address: str = ZERO_ADDRESS
    avs_directory_address: str = ZERO_ADDRESS
    rewards_coordinator_address: str = ZERO_ADDRESS

    @field_validator(
        "delegation_manager_address",
        "avs_directory_address",
        "rewards_coordinator_address",
        mode="before",
    )
    @classmethod
    def normalize_address(cls, value):
        return _normalize_address(value)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    eth_rpc_url: str = ""
    rpc_timeout_seconds: float = 10.0
    delegation_manager_address: str = ZERO_ADDRESS
    avs_directory_address: str = ZERO_ADDRESS
    rewards_coordinator_address: str = ZERO_ADDRESS
    log_level: str = "INFO"

    @field_validator(
        "delegation_manager_address",
        "avs_directory_address",
        "rewards_coordinator_address",
        mode="before",
    )
    @classmethod
    def normalize_address(cls, value):
        return _normalize_address(value)

    @field_validator("rpc_timeout_seconds", mode="before")
    @classmethod
    def parse_rpc_timeout(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return 10.0
        return value

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value):
        if isinstance(value, str):
            return value.strip().upper() or "INFO"
        return value

    def reader_config(self) -> ReaderConfig:
        return ReaderConfig(
            delegation_manager_address=self.delegation_manager_address,
            avs_directory_address=self.avs_directory_address,
            rewards_coordinator_address=self.rewards_coordinator_address,
        )


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure the root logger so all elreader.* module loggers emit to console.

    The library never calls this itself; it is for the embedding
    application or script to call once at startup.
    """
    name = (level or settings.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
