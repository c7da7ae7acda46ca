import pytest

from dialectorm.core import PrimaryKey, Scanner


@pytest.mark.parametrize("src", [42, 42.0])
def test_scan_accepts_numeric_shapes(src):
    key = PrimaryKey()
    key.scan(src)
    assert key.id == 42
    assert key.value() == 42


def test_scan_truncates_floats():
    key = PrimaryKey()
    key.scan(7.9)
    assert key.id == 7


def test_scan_wraps_negative_integers_to_unsigned():
    key = PrimaryKey()
    key.scan(-1)
    assert key.id == 2**64 - 1


@pytest.mark.parametrize("src", ["42", b"42", None, True, object()])
def test_scan_ignores_other_shapes(src):
    key = PrimaryKey()
    key.scan(src)
    assert key.id == 0


def test_scan_ignores_other_shapes_without_resetting():
    key = PrimaryKey(id=5)
    key.scan("not a number")
    assert key.value() == 5


def test_primary_key_is_a_scanner():
    assert isinstance(PrimaryKey(), Scanner)


@pytest.mark.parametrize("src", [float("nan"), float("inf"), float("-inf")])
def test_scan_ignores_non_finite_floats(src):
    key = PrimaryKey(id=3)
    key.scan(src)
    assert key.id == 3


def test_scan_wraps_huge_floats_to_unsigned():
    key = PrimaryKey()
    key.scan(1e30)
    assert key.id == int(1e30) & (2**64 - 1)
    assert key.id < 2**64
