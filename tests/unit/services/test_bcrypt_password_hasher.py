from authflow.adapter.services.bcrypt_password_hasher import BcryptPasswordHasher
from authflow.app.services.password_hasher import BCRYPT_COST, MAX_PASSWORD_BYTES, password_fits


def test_default_cost_factor_is_12():
    assert BcryptPasswordHasher().rounds == BCRYPT_COST == 12


def test_hash_is_bcrypt_with_configured_cost():
    hasher = BcryptPasswordHasher(rounds=4)

    password_hash = hasher.hash("secret")

    assert len(password_hash) == 60
    assert password_hash.startswith("$2b$04$")
    assert "secret" not in password_hash


def test_compare_matches_only_the_original_password():
    hasher = BcryptPasswordHasher(rounds=4)
    password_hash = hasher.hash("secret")

    assert hasher.compare("secret", password_hash) is True
    assert hasher.compare("Secret", password_hash) is False


def test_compare_against_non_bcrypt_value_is_false():
    hasher = BcryptPasswordHasher(rounds=4)

    assert hasher.compare("secret", "not-a-hash") is False


def test_compare_with_password_over_72_bytes_is_false():
    hasher = BcryptPasswordHasher(rounds=4)
    password_hash = hasher.hash("secret")

    assert hasher.compare("x" * 80, password_hash) is False


def test_dummy_hash_is_reused_and_never_matches_user_input():
    hasher = BcryptPasswordHasher(rounds=4)

    dummy = hasher.dummy_hash()

    assert dummy == BcryptPasswordHasher(rounds=4).dummy_hash()
    assert dummy.startswith("$2b$04$")
    assert hasher.compare("secret", dummy) is False


def test_password_fits_counts_utf8_bytes():
    assert password_fits("a" * MAX_PASSWORD_BYTES) is True
    assert password_fits("a" * (MAX_PASSWORD_BYTES + 1)) is False
    # 36 two-byte characters are exactly 72 bytes
    assert password_fits("é" * 36) is True
    assert password_fits("é" * 37) is False
