"""Tests for temporary token storage."""

from unittest.mock import patch

import pytest

from oauth_bridge.core.config import Settings
from oauth_bridge.tokens.temporary_token import TemporaryToken
from oauth_bridge.tokens.token_store import (
    SESSION_SEALED_TOKEN_KEY,
    SESSION_TEMPORARY_TOKEN_KEY,
    SESSION_TEMPORARY_TOKEN_SECRET_KEY,
    EncryptedTemporaryTokenStore,
    InMemoryTemporaryTokenStore,
    SessionTemporaryTokenStore,
    TemporaryTokenStore,
)
from oauth_bridge.utils.errors import ConfigurationError, NotFoundError


class TestTemporaryToken:
    """Tests for the TemporaryToken data object."""

    def test_fields(self, temporary_token: TemporaryToken):
        """Test that value and secret are exposed."""
        assert temporary_token.token_value == "temp_token_T1"
        assert temporary_token.token_secret == "temp_secret_S1"

    def test_is_immutable(self, temporary_token: TemporaryToken):
        """Test that a temporary token cannot be modified."""
        with pytest.raises(AttributeError):
            temporary_token.token_value = "other"  # type: ignore[misc]

    def test_repr_hides_secret(self, temporary_token: TemporaryToken):
        """Test that the secret does not leak into repr()."""
        assert "temp_secret_S1" not in repr(temporary_token)


class TestSessionTemporaryTokenStore:
    """Tests for the session-backed store."""

    def test_save_then_load_round_trip(self, token_store, temporary_token):
        """Test that a saved token loads back with equal value and secret."""
        token_store.save(temporary_token)
        loaded = token_store.load()

        assert loaded.token_value == temporary_token.token_value
        assert loaded.token_secret == temporary_token.token_secret
        assert loaded == temporary_token

    def test_save_uses_fixed_session_keys(self, session, token_store, temporary_token):
        """Test that the pair is written under the two fixed keys."""
        token_store.save(temporary_token)

        assert session[SESSION_TEMPORARY_TOKEN_KEY] == "temp_token_T1"
        assert session[SESSION_TEMPORARY_TOKEN_SECRET_KEY] == "temp_secret_S1"

    def test_save_overwrites(self, token_store, temporary_token):
        """Test that saving again replaces the previous token."""
        token_store.save(temporary_token)
        token_store.save(TemporaryToken("T2", "S2"))

        assert token_store.load() == TemporaryToken("T2", "S2")

    def test_load_empty_raises(self, token_store):
        """Test that loading from an empty session raises NotFoundError."""
        with pytest.raises(NotFoundError):
            token_store.load()

    def test_load_partial_entry_raises(self, session, token_store):
        """Test that only one of the two keys counts as absent."""
        session[SESSION_TEMPORARY_TOKEN_KEY] = "T1"

        with pytest.raises(NotFoundError):
            token_store.load()

    def test_clear_removes_token(self, session, token_store, temporary_token):
        """Test that clear removes both keys."""
        token_store.save(temporary_token)
        token_store.clear()

        assert SESSION_TEMPORARY_TOKEN_KEY not in session
        assert SESSION_TEMPORARY_TOKEN_SECRET_KEY not in session
        with pytest.raises(NotFoundError):
            token_store.load()

    def test_clear_is_idempotent(self, token_store):
        """Test that clearing an empty store is a no-op."""
        token_store.clear()
        token_store.clear()

    def test_clear_leaves_other_session_data(self, session, token_store, temporary_token):
        """Test that unrelated session keys survive clear."""
        session["user_pref"] = "dark"
        token_store.save(temporary_token)
        token_store.clear()

        assert session == {"user_pref": "dark"}

    def test_satisfies_protocol(self, token_store):
        """Test that the store satisfies the TemporaryTokenStore protocol."""
        assert isinstance(token_store, TemporaryTokenStore)


class TestInMemoryTemporaryTokenStore:
    """Tests for the attempt-keyed in-memory store."""

    def test_round_trip(self, temporary_token):
        """Test save and load for one attempt."""
        store = InMemoryTemporaryTokenStore("session-1", backend={})
        store.save(temporary_token)

        assert store.load() == temporary_token

    def test_attempts_are_isolated(self, temporary_token):
        """Test that stores sharing a backend never see each other's tokens."""
        backend: dict = {}
        alice = InMemoryTemporaryTokenStore("session-alice", backend=backend)
        bob = InMemoryTemporaryTokenStore("session-bob", backend=backend)

        alice.save(temporary_token)

        with pytest.raises(NotFoundError):
            bob.load()

        bob.save(TemporaryToken("bob_token", "bob_secret"))
        assert alice.load() == temporary_token
        assert bob.load() == TemporaryToken("bob_token", "bob_secret")

    def test_clear_only_affects_own_attempt(self, temporary_token):
        """Test that clear removes only this attempt's entry."""
        backend: dict = {}
        alice = InMemoryTemporaryTokenStore("session-alice", backend=backend)
        bob = InMemoryTemporaryTokenStore("session-bob", backend=backend)
        alice.save(temporary_token)
        bob.save(temporary_token)

        alice.clear()
        alice.clear()

        assert list(backend) == ["session-bob"]

    def test_empty_attempt_id_rejected(self):
        """Test that an empty attempt id is refused."""
        with pytest.raises(ValueError):
            InMemoryTemporaryTokenStore("")

    def test_expired_token_counts_as_absent(self, temporary_token):
        """Test that tokens older than max_age are rejected and dropped."""
        backend: dict = {}
        store = InMemoryTemporaryTokenStore("session-1", backend=backend, max_age=60)
        with patch("time.time", return_value=1_700_000_000):
            store.save(temporary_token)

        with patch("time.time", return_value=1_700_000_000 + 120):
            with pytest.raises(NotFoundError, match="expired"):
                store.load()

        assert backend == {}

    def test_save_prunes_abandoned_attempts(self, temporary_token):
        """Test that expired entries of other attempts are evicted on save."""
        backend: dict = {}
        with patch("time.time", return_value=1_700_000_000):
            for i in range(100):
                InMemoryTemporaryTokenStore(
                    f"abandoned-{i}", backend=backend, max_age=60
                ).save(temporary_token)

        fresh = InMemoryTemporaryTokenStore("session-new", backend=backend, max_age=60)
        with patch("time.time", return_value=1_700_000_000 + 120):
            fresh.save(temporary_token)

            assert list(backend) == ["session-new"]
            assert fresh.load() == temporary_token

    def test_default_max_age_from_settings(self):
        """Test that the lifetime defaults to temporary_token_max_age."""
        with patch("oauth_bridge.tokens.token_store.settings") as mock_settings:
            mock_settings.temporary_token_max_age = 42

            store = InMemoryTemporaryTokenStore("session-1", backend={})

        assert store.max_age == 42


class TestEncryptedTemporaryTokenStore:
    """Tests for the Fernet-encrypted store."""

    @pytest.fixture
    def encryption_key(self) -> str:
        """Generate a Fernet key."""
        return EncryptedTemporaryTokenStore.generate_encryption_key()

    def test_round_trip(self, session, encryption_key, temporary_token):
        """Test that an encrypted token loads back intact."""
        store = EncryptedTemporaryTokenStore(session, encryption_key)
        store.save(temporary_token)

        assert store.load() == temporary_token

    def test_secret_not_readable_in_session(self, session, encryption_key, temporary_token):
        """Test that the session only holds ciphertext."""
        store = EncryptedTemporaryTokenStore(session, encryption_key)
        store.save(temporary_token)

        sealed = session[SESSION_SEALED_TOKEN_KEY]
        assert "temp_secret_S1" not in sealed
        assert "temp_token_T1" not in sealed

    def test_wrong_key_counts_as_absent(self, session, encryption_key, temporary_token):
        """Test that a token sealed with another key cannot be loaded."""
        EncryptedTemporaryTokenStore(session, encryption_key).save(temporary_token)
        other = EncryptedTemporaryTokenStore(
            session, EncryptedTemporaryTokenStore.generate_encryption_key()
        )

        with pytest.raises(NotFoundError):
            other.load()

    def test_expired_token_counts_as_absent(self, session, encryption_key, temporary_token):
        """Test that tokens older than max_age are rejected."""
        store = EncryptedTemporaryTokenStore(session, encryption_key, max_age=60)
        with patch("time.time", return_value=1_700_000_000):
            store.save(temporary_token)

        with patch("time.time", return_value=1_700_000_000 + 120):
            with pytest.raises(NotFoundError):
                store.load()

    def test_clear(self, session, encryption_key, temporary_token):
        """Test that clear removes the sealed value and is idempotent."""
        store = EncryptedTemporaryTokenStore(session, encryption_key)
        store.save(temporary_token)
        store.clear()
        store.clear()

        assert SESSION_SEALED_TOKEN_KEY not in session
        with pytest.raises(NotFoundError):
            store.load()

    def test_invalid_key_raises_configuration_error(self, session):
        """Test that a malformed key is a configuration error."""
        with pytest.raises(ConfigurationError):
            EncryptedTemporaryTokenStore(session, "not-a-fernet-key")

    def test_from_settings(self, session, encryption_key, temporary_token):
        """Test building the store from settings."""
        config = Settings(_env_file=None, token_encryption_key=encryption_key)

        store = EncryptedTemporaryTokenStore.from_settings(session, config)
        store.save(temporary_token)

        assert store.max_age == 900
        assert store.load() == temporary_token

    def test_from_settings_without_key(self, session):
        with pytest.raises(ConfigurationError, match="token_encryption_key"):
            EncryptedTemporaryTokenStore.from_settings(session, Settings(_env_file=None))
