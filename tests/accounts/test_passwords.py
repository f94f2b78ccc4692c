from dealership.accounts.passwords import PasswordHasher
from dealership.core.constants import BCRYPT_ROUNDS


def test_hash_is_salted_and_verifies(hasher):
    a = hasher.hash("Abc123!@#x")
    b = hasher.hash("Abc123!@#x")

    assert a != b
    assert a != "Abc123!@#x"
    assert hasher.verify("Abc123!@#x", a)
    assert hasher.verify("Abc123!@#x", b)


def test_wrong_password_fails(hasher):
    assert not hasher.verify("Abc123!@#y", hasher.hash("Abc123!@#x"))


def test_verify_fails_closed_on_garbage_hash(hasher):
    assert hasher.verify("Abc123!@#x", "CHANGE_ME") is False
    assert hasher.verify("Abc123!@#x", None) is False
    assert hasher.verify("", hasher.hash("Abc123!@#x")) is False


def test_default_cost_factor_is_ten():
    assert BCRYPT_ROUNDS == 10
    assert PasswordHasher().hash("Abc123!@#x").startswith("$2b$10$")
