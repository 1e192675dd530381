import pytest

from scopeoracle.errors import ScopeError, ScopeErrorCode


def test_integer_overflow_message():
    assert ScopeErrorCode.INTEGER_OVERFLOW.message() == "Integer overflow"


def test_confidence_message():
    assert (
        ScopeErrorCode.CONFIDENCE_INTERVAL_CHECK_FAILED.message()
        == "Confidence interval check failed"
    )


def test_codes_are_contiguous_from_zero():
    count = len(ScopeErrorCode)
    codes = [ScopeError(i).code for i in range(count)]
    assert codes == sorted(ScopeErrorCode, key=lambda code: code.value)
    assert [code.value for code in codes] == list(range(count))


def test_every_code_has_a_message():
    for code in ScopeErrorCode:
        message = code.message()
        assert message
        assert str(ScopeError(code)) == message


def test_first_code_is_integer_overflow():
    assert ScopeErrorCode(0) is ScopeErrorCode.INTEGER_OVERFLOW


def test_error_carries_code_and_message():
    err = ScopeError(ScopeErrorCode.BAD_TOKEN_NB)
    assert err.code is ScopeErrorCode.BAD_TOKEN_NB
    assert str(err) == "The token index received is out of range"


def test_error_from_int():
    err = ScopeError(int(ScopeErrorCode.EMPTY_TOKEN_LIST))
    assert err.code is ScopeErrorCode.EMPTY_TOKEN_LIST


def test_price_not_valid_error():
    err = ScopeError(ScopeErrorCode.PRICE_NOT_VALID)
    assert err.code is ScopeErrorCode.PRICE_NOT_VALID
    assert str(err) == "Price is not valid"


def test_unknown_code_rejected():
    with pytest.raises(ValueError):
        ScopeError(10_000)