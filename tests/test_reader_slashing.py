import pytest

from elreader.errors import ContractNotProvidedError
from elreader.onchain.reader import ChainReader

from tests.stubs import AVS, DIGEST, OPERATOR, SALT, DummyWeb3, avs_directory, slasher


def test_can_slash_until_block(reader, contracts):
    assert reader.service_manager_can_slash_operator_until_block(OPERATOR, AVS) == 4_294_967_295
    assert contracts["slasher"].calls[0][:2] == ("contractCanSlashOperatorUntilBlock", (OPERATOR, AVS))


@pytest.mark.parametrize("frozen", [True, False])
def test_operator_is_frozen_passes_boolean_through(frozen):
    reader = ChainReader(DummyWeb3(), slasher=slasher(isFrozen=frozen))
    assert reader.operator_is_frozen(OPERATOR) is frozen


def test_slasher_queries_need_slasher():
    reader = ChainReader(DummyWeb3(), avs_directory=avs_directory())
    with pytest.raises(ContractNotProvidedError, match="^slasher contract not provided$"):
        reader.operator_is_frozen(OPERATOR)


def test_avs_registration_digest_forwards_arguments(reader, contracts):
    digest = reader.calculate_operator_avs_registration_digest_hash(OPERATOR, AVS, SALT.hex(), 1_900_000_000)
    assert digest == DIGEST
    assert contracts["avs_directory"].calls[0][:2] == (
        "calculateOperatorAVSRegistrationDigestHash",
        (OPERATOR, AVS, SALT, 1_900_000_000),
    )


def test_avs_registration_digest_returns_bytes():
    directory = avs_directory(calculateOperatorAVSRegistrationDigestHash=bytearray(DIGEST))
    reader = ChainReader(DummyWeb3(), avs_directory=directory)
    digest = reader.calculate_operator_avs_registration_digest_hash(OPERATOR, AVS, SALT, 0)
    assert isinstance(digest, bytes)
    assert digest == DIGEST
