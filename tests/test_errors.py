import pytest
from pydantic import ValidationError

from cadence.errors import ContractError, require_count, require_delay, require_positive_count


def test_contract_error_keeps_raw_value() -> None:
    error = ContractError("bad", raw_value=-3)
    assert error.raw_value == -3
    assert "raw_value=-3" in repr(error)
    assert isinstance(error, ValueError)


def test_validation_error_is_chained() -> None:
    with pytest.raises(ContractError) as exc_info:
        require_count("take", -1)
    assert isinstance(exc_info.value.__cause__, ValidationError)


def test_valid_values_pass_through() -> None:
    assert require_count("drop", 0) == 0
    assert require_positive_count("chunk", 4) == 4
    assert require_delay("timeout", 2) == 2.0
    assert isinstance(require_delay("timeout", 2), float)


@pytest.mark.parametrize("value", [1.0, "1", None])
def test_counts_must_be_real_ints(value) -> None:
    with pytest.raises(ContractError):
        require_positive_count("repeat", value)
