from datetime import datetime, timedelta, timezone

import pytest

from linktracker_app.schemas.url import UrlRecord
from linktracker_app.services.expiry import MAX_VALIDITY_MINUTES, compute_expiry, parse_validity

CREATED = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


class TestComputeExpiry:

    def test_empty_validity_defaults_to_thirty_minutes(self):
        assert compute_expiry(CREATED, "") == compute_expiry(CREATED, "30")
        assert compute_expiry(CREATED, None) == CREATED + timedelta(minutes=30)

    def test_adds_minutes(self):
        assert compute_expiry(CREATED, "90") == CREATED + timedelta(minutes=90)
        assert compute_expiry(CREATED, 1) == CREATED + timedelta(minutes=1)

    def test_custom_default(self):
        assert compute_expiry(CREATED, "", default=5) == CREATED + timedelta(minutes=5)

    @pytest.mark.parametrize("validity", ["0", "-5", "abc", 0, True])
    def test_invalid_validity_raises(self, validity):
        with pytest.raises(ValueError):
            compute_expiry(CREATED, validity)

    def test_parse_validity(self):
        assert parse_validity("15") == 15
        assert parse_validity("") == 30

    def test_ceiling_keeps_expiry_representable(self):
        assert compute_expiry(CREATED, MAX_VALIDITY_MINUTES) == CREATED + timedelta(minutes=MAX_VALIDITY_MINUTES)

        with pytest.raises(ValueError):
            compute_expiry(CREATED, "99999999999")


class TestIsExpired:
    """Expiry is informational; this only reports it"""

    def _record(self):
        return UrlRecord(
            original_url="https://example.com",
            shortcode="abc123",
            shortened_link="http://localhost:3000/abc123",
            creation_date=CREATED,
            expiry_date=compute_expiry(CREATED, "30"),
        )

    def test_not_expired_before_deadline(self):
        assert not self._record().is_expired(CREATED + timedelta(minutes=29))

    def test_expired_at_deadline(self):
        assert self._record().is_expired(CREATED + timedelta(minutes=30))

    def test_naive_stored_dates_are_utc(self):
        record = UrlRecord.model_validate({
            "originalUrl": "https://example.com",
            "shortcode": "abc123",
            "shortenedLink": "http://localhost:3000/abc123",
            "creationDate": "2026-10-19T12:00:00",
            "expiryDate": "2026-10-19T12:30:00",
        })

        assert record.expiry_date == CREATED + timedelta(minutes=30)
        assert record.is_expired(CREATED + timedelta(hours=1))
