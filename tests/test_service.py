"""Tests for service layer."""

import logging

import pytest
from quicklink.allocation import AllocationTable
from quicklink.errors import ClaimError, GenerationError
from quicklink.service import URLShortenerService, ShortURLError
from quicklink.shortcode import ShortCodeGenerator


class TestURLShortenerService:
    """Test URL shortener service."""

    def test_create_short_url(self, service, sample_urls):
        """Test creating short URL."""
        result = service.create_short_url(sample_urls[0])

        assert len(result["short_code"]) == 6
        assert result["original_url"] == sample_urls[0]
        assert result["created_at"] is not None
        assert not result["custom"]

    def test_create_with_custom_code(self, service, sample_urls):
        """Test creating with custom code."""
        result = service.create_short_url(sample_urls[0], custom_code="test123")

        assert result["short_code"] == "test123"
        assert result["custom"]

    def test_empty_custom_code_generates(self, service, sample_urls):
        """An empty custom code falls back to generation."""
        result = service.create_short_url(sample_urls[0], custom_code="")

        assert len(result["short_code"]) == 6
        assert not result["custom"]

    def test_target_is_sanitized(self, service):
        """Scheme and host are lower-cased before storage."""
        result = service.create_short_url("https://Example.com/Path", custom_code="My-Link")

        assert result["original_url"] == "https://example.com/Path"
        assert service.get_original_url("My-Link") == "https://example.com/Path"

    def test_create_duplicate_custom_code(self, service, sample_urls):
        """Test duplicate custom code rejection."""
        service.create_short_url(sample_urls[0], custom_code="duplicate")

        with pytest.raises(ShortURLError, match="already in use") as exc_info:
            service.create_short_url(sample_urls[1], custom_code="duplicate")

        assert exc_info.value.kind is ClaimError.ALREADY_EXISTS
        assert service.get_original_url("duplicate") == sample_urls[0]

    def test_reserved_custom_code(self, service):
        """Reserved custom codes are refused."""
        with pytest.raises(ShortURLError, match="reserved") as exc_info:
            service.create_short_url("https://x.com", custom_code="admin")

        assert exc_info.value.kind is ClaimError.RESERVED
        assert exc_info.value.error == "Reserved code"

    def test_invalid_custom_code(self, service):
        """Malformed custom codes carry the validator's reason."""
        with pytest.raises(ShortURLError, match="hyphen") as exc_info:
            service.create_short_url("https://x.com", custom_code="-bad-")

        assert exc_info.value.kind is ClaimError.INVALID_FORMAT
        assert exc_info.value.error == "Invalid custom code"

    def test_invalid_url(self, service):
        """Test invalid URL rejection."""
        with pytest.raises(ShortURLError, match="HTTP or HTTPS") as exc_info:
            service.create_short_url("not-a-url")

        assert exc_info.value.kind == ShortURLError.INVALID_URL
        assert service.get_statistics()["total_urls"] == 0

    @pytest.mark.parametrize("url", ["http://user@", "https://exa\nmple.com/a\tb"])
    def test_hostless_or_mangled_url_not_stored(self, service, url):
        """URLs without a real host or with control characters store nothing."""
        with pytest.raises(ShortURLError) as exc_info:
            service.create_short_url(url, custom_code="hostless")

        assert exc_info.value.kind == ShortURLError.INVALID_URL
        assert not service.url_exists("hostless")

    def test_short_url_error_is_value_error(self, service):
        """Callers catching ValueError keep working."""
        with pytest.raises(ValueError):
            service.create_short_url("ftp://example.com")

    def test_custom_codes_disabled(self, table, logger):
        """Custom codes can be switched off."""
        service = URLShortenerService(table=table, logger=logger, enable_custom_codes=False)

        with pytest.raises(ShortURLError, match="not enabled") as exc_info:
            service.create_short_url("https://x.com", custom_code="promo")

        assert exc_info.value.kind == ShortURLError.CUSTOM_DISABLED

    def test_generation_exhausted(self, fixed_bytes, logger, caplog):
        """Exhausted retries surface as a generation failure and are logged."""
        table = AllocationTable(generator=ShortCodeGenerator(random_bytes=fixed_bytes(bytes(6))))
        service = URLShortenerService(table=table, logger=logger)
        service.create_short_url("https://first.example")

        with caplog.at_level(logging.ERROR, logger="quicklink"):
            with pytest.raises(ShortURLError) as exc_info:
                service.create_short_url("https://second.example")

        assert exc_info.value.kind is GenerationError.EXHAUSTED_RETRIES
        assert "10 attempts" in caplog.text

    def test_get_original_url(self, service, sample_urls):
        """Test getting original URL."""
        result = service.create_short_url(sample_urls[0])

        assert service.get_original_url(result["short_code"]) == sample_urls[0]

    def test_get_nonexistent_url(self, service):
        """Test getting nonexistent URL."""
        assert service.get_original_url("nonexistent") is None

    def test_get_malformed_code(self, service):
        """Malformed codes are a miss without a table lookup."""
        assert service.get_original_url("a") is None
        assert service.get_original_url("bad code!") is None
        assert not service.url_exists("x" * 30)
        assert service.get_url_info("no/slash") is None

    def test_url_exists(self, service, sample_urls):
        """Test URL existence check."""
        result = service.create_short_url(sample_urls[0])

        assert service.url_exists(result["short_code"])
        assert not service.url_exists("nonexistent")

    def test_get_url_info(self, service, sample_urls):
        """Info includes the custom flag and creation time."""
        service.create_short_url(sample_urls[1], custom_code="repo")

        info = service.get_url_info("repo")

        assert info["short_code"] == "repo"
        assert info["original_url"] == sample_urls[1]
        assert info["custom"]

    def test_statistics(self, service, sample_urls):
        """Statistics count custom and generated codes."""
        service.create_short_url(sample_urls[0])
        service.create_short_url(sample_urls[1])
        service.create_short_url(sample_urls[2], custom_code="custom1")

        stats = service.get_statistics()

        assert stats["total_urls"] == 3
        assert stats["custom_urls"] == 1
        assert stats["generated_urls"] == 2
        assert stats["storage"] == "memory"
        assert stats["custom_codes_enabled"]

    def test_health_check(self, service):
        """Test health check."""
        health = service.health_check()

        assert health == {"storage": True, "overall": True}
