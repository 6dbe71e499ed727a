import pytest

from eventpay.bookings import tokens
from eventpay.errors import DuplicateTokenError, PersistenceError

def test_generate_token_shape():
    for _ in range(50):
        token = tokens.generate_token()
        assert len(token) == 6
        assert all(c in tokens.TOKEN_ALPHABET for c in token)

def test_generate_unique_token_skips_taken(monkeypatch):
    drawn = iter(["AAAAAA", "BBBBBB", "CCCCCC"])
    monkeypatch.setattr(tokens, "generate_token", lambda: next(drawn))
    taken = {"AAAAAA", "BBBBBB"}
    assert tokens.generate_unique_token(lambda t: t in taken) == "CCCCCC"

def test_insert_conflicts_twice_then_third_token_succeeds(monkeypatch):
    drawn = iter(["AAAAAA", "BBBBBB", "CCCCCC"])
    monkeypatch.setattr(tokens, "generate_token", lambda: next(drawn))
    attempts = []

    def _insert(token):
        attempts.append(token)
        if len(attempts) < 3:
            raise DuplicateTokenError(token)
        return {"id": "b1", "token": token}

    row = tokens.create_with_unique_token(lambda t: False, _insert)

    assert row == {"id": "b1", "token": "CCCCCC"}
    assert attempts == ["AAAAAA", "BBBBBB", "CCCCCC"]

def test_insert_conflicts_exhausted_raises_persistence_error():
    def _insert(token):
        raise DuplicateTokenError(token)

    with pytest.raises(PersistenceError):
        tokens.create_with_unique_token(lambda t: False, _insert)

def test_persistence_error_from_insert_is_not_retried():
    calls = []

    def _insert(token):
        calls.append(token)
        raise PersistenceError()

    with pytest.raises(PersistenceError):
        tokens.create_with_unique_token(lambda t: False, _insert)
    assert len(calls) == 1
