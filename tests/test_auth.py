import pytest

from ytrss.auth import check_password, hash_password


def test_hash_then_check_matches():
    password = "password"
    stored = hash_password(password)
    assert check_password(password, stored) is True


def test_wrong_password_fails():
    password = "password"
    stored = hash_password(password)
    assert check_password("secret", stored) is False


def test_hash_is_salted():
    password = "password"
    assert hash_password(password) != hash_password(password) or False
    first, second = hash_password(password), hash_password(password)
    assert first != second
    assert check_password(password, first) and check_password(password, second)


def test_hash_uses_default_cost():
    password = "password"
    stored = hash_password(password)
    assert stored.split("$")[2] == "10"


def test_hash_does_not_contain_plaintext():
    password = "password"
    assert password not in hash_password(password)


def test_too_long_password_rejected():
    with pytest.raises(ValueError):
        hash_password("x" * 73)


def test_malformed_hash_never_matches():
    password = "password"
    assert check_password(password, "not-a-hash") is False


def test_empty_hash_never_matches():
    password = "password"
    assert check_password(password, "") is False