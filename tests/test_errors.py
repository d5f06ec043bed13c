import pytest

from ethartifact.errors import (
    AbiMismatchError,
    ArtifactError,
    BytecodeError,
    DuplicateChainError,
    InvalidHexDigitError,
    InvalidLengthError,
    LibraryNotFoundError,
    LinkError,
    ParseParamTypeError,
    PlaceholderTooShortError,
    UndefinedLibraryError,
)


def test_abi_mismatch_message_and_name():
    err = AbiMismatchError("A")
    assert str(err) == "contract A has different ABIs on different chains"
    assert err.name == "A"
    assert isinstance(err, ArtifactError)


def test_duplicate_chain_message_and_id():
    err = DuplicateChainError("1")
    assert str(err) == "chain with id 1 appears several times in the artifact"
    assert err.chain_id == "1"
    assert isinstance(err, ArtifactError)


def test_bytecode_error_messages():
    assert str(InvalidLengthError()) == "invalid bytecode length"
    assert str(PlaceholderTooShortError()) == "placeholder at end of bytecode is too short"
    err = InvalidHexDigitError("g")
    assert str(err) == "invalid hex digit 'g'"
    assert err.digit == "g"


@pytest.mark.parametrize(
    ("err", "message"),
    [
        (InvalidLengthError(), "invalid bytecode length"),
        (PlaceholderTooShortError(), "placeholder at end of bytecode is too short"),
        (InvalidHexDigitError("x"), "invalid hex digit 'x'"),
    ],
)
def test_bytecode_errors_are_value_errors(err, message):
    with pytest.raises(BytecodeError) as info:
        raise err
    assert info.value is err
    assert isinstance(info.value, ValueError)
    assert str(info.value) == message


@pytest.mark.parametrize(
    ("err", "message"),
    [
        (
            LibraryNotFoundError("a"),
            "unable to link library: can't find link placeholder for a",
        ),
        (UndefinedLibraryError("b"), "undefined library b"),
    ],
)
def test_link_errors_share_base(err, message):
    with pytest.raises(LinkError) as info:
        raise err
    assert info.value is err
    assert str(info.value) == message


def test_parse_param_type_error():
    err = ParseParamTypeError("uint7")
    assert str(err) == "'uint7' is not a valid Solidity type"
    assert err.value == "uint7"
    assert isinstance(err, ValueError)