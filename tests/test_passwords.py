import pytest

from gatekeep.auth.passwords import hash_password, verify_dummy, verify_password


def test_hash_then_verify():
    h = hash_password("correct horse battery")
    assert h.startswith("$argon2")
    assert verify_password(h, "correct horse battery")


def test_wrong_password_does_not_verify():
    h = hash_password("correct horse battery")
    assert not verify_password(h, "correct horse battery!")
    assert not verify_password(h, "Correct horse battery")


def test_hash_is_salted():
    a = hash_password("same-input-123")
    b = hash_password("same-input-123")
    assert a != b
    assert verify_password(a, "same-input-123")
    assert verify_password(b, "same-input-123")


@pytest.mark.parametrize("bad_hash", ["", "not-a-hash", "$argon2id$v=19$garbage", "$2b$12$abcdefghijklmnopqrstuv"])
def test_malformed_hash_returns_false(bad_hash):
    assert verify_password(bad_hash, "whatever-password") is False


def test_empty_password_never_verifies():
    h = hash_password("something-long")
    assert verify_password(h, "") is False


def test_hash_rejects_empty_password():
    with pytest.raises(ValueError):
        hash_password("")


def test_verify_dummy_always_false():
    assert verify_dummy("anything") is False
    assert verify_dummy("") is False


@pytest.mark.parametrize("bad_hash", ["é-not-a-hash", "$argon2id$v=19$m=65536,t=3,p=4$ñ$ñ"])
def test_non_ascii_hash_returns_false(bad_hash):
    assert verify_password(bad_hash, "whatever-password") is False


def test_unencodable_password_returns_false():
    h = hash_password("longenough1")
    assert verify_password(h, "bad\ud800pass") is False
    assert verify_dummy("bad\ud800pass") is False


def test_dummy_hash_is_built_once_at_import():
    from gatekeep.auth import passwords

    before = passwords._DUMMY_HASH
    assert before.startswith("$argon2")
    verify_dummy("anything")
    assert passwords._DUMMY_HASH is before
