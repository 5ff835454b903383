from datetime import UTC, datetime, timedelta

from identity.session.session import UserSession

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


class TestUserSession:
    def test_open_issues_unique_tokens(self):
        first = UserSession.open(user_id=1, now=NOW, ttl_minutes=300)
        second = UserSession.open(user_id=1, now=NOW, ttl_minutes=300)
        assert first.token != second.token
        assert len(first.token) == 36

    def test_expiry_is_ttl_after_now(self):
        session = UserSession.open(user_id=1, now=NOW, ttl_minutes=300)
        assert session.expires_at == NOW + timedelta(hours=5)

    def test_not_expired_before_deadline(self):
        session = UserSession.open(user_id=1, now=NOW, ttl_minutes=30)
        assert not session.is_expired(NOW + timedelta(minutes=29))

    def test_expired_after_deadline(self):
        session = UserSession.open(user_id=1, now=NOW, ttl_minutes=30)
        assert session.is_expired(NOW + timedelta(minutes=31))

    def test_naive_stored_expiry_is_read_as_utc(self):
        session = UserSession(user_id=1, token="t", expires_at=datetime(2026, 10, 19, 12, 30))
        assert not session.is_expired(NOW)
        assert session.is_expired(NOW + timedelta(hours=1))
