"""Business logic service for URL shortener."""

import logging
from typing import Optional, Dict, Any, Union

from .allocation import AllocationTable
from .common.validators import (
    is_valid_url,
    sanitize_url,
    is_valid_short_code,
    is_valid_short_code_format,
)
from .errors import ClaimError, GenerationError


class ShortURLError(ValueError):
    """A shorten request that cannot be fulfilled.

    Attributes:
        kind: INVALID_URL, CUSTOM_DISABLED, or the ClaimError/GenerationError
            reported by the allocation table
        error: Short title for the failure
        message: Human readable explanation
    """

    INVALID_URL = "invalid_url"
    CUSTOM_DISABLED = "custom_disabled"

    def __init__(self, kind: Union[str, ClaimError, GenerationError], error: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.error = error
        self.message = message


_CLAIM_ERROR_TEXT = {
    ClaimError.RESERVED: ("Reserved code", "This custom code is reserved and cannot be used"),
    ClaimError.ALREADY_EXISTS: ("Code already exists", "This custom code is already in use"),
    GenerationError.EXHAUSTED_RETRIES: ("Generation failed", "Failed to generate short code"),
}


class URLShortenerService:
    """Service layer for URL shortening business logic."""

    def __init__(
        self,
        table: AllocationTable,
        logger: Optional[logging.Logger] = None,
        enable_custom_codes: bool = True,
    ):
        """Initialize URL shortener service.

        Args:
            table: Allocation table holding the mappings
            logger: Optional logger
            enable_custom_codes: Whether to allow custom short codes
        """
        self.table = table
        self.logger = logger or logging.getLogger(__name__)
        self.enable_custom_codes = enable_custom_codes

    def create_short_url(
        self,
        original_url: str,
        custom_code: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new short URL.

        Args:
            original_url: The original long URL
            custom_code: Optional custom short code, empty means generate one

        Returns:
            Dictionary with short_code, original_url, created_at, custom

        Raises:
            ShortURLError: If validation fails or the code cannot be claimed
            RandomSourceError: If the secure random source fails
        """
        if not is_valid_url(original_url):
            self.logger.info(f"Rejected invalid URL: {str(original_url)[:100]!r}")
            raise ShortURLError(
                ShortURLError.INVALID_URL,
                "Invalid URL",
                "URL must be a valid HTTP or HTTPS URL",
            )

        target = sanitize_url(original_url)

        if custom_code:
            if not self.enable_custom_codes:
                raise ShortURLError(
                    ShortURLError.CUSTOM_DISABLED,
                    "Custom codes disabled",
                    "Custom short codes are not enabled",
                )
            outcome = self.table.try_claim_custom(custom_code, target)
        else:
            outcome = self.table.generate_and_claim(target)

        if not outcome.ok:
            self._raise_claim_failure(outcome.error, custom_code)

        mapping = self.table.get_mapping(outcome.code)

        self.logger.info(f"Shortened URL: {outcome.code} -> {target}")

        return {
            "short_code": mapping.short_code,
            "original_url": mapping.original_url,
            "created_at": mapping.created_at,
            "custom": mapping.custom,
        }

    def get_original_url(self, short_code: str) -> Optional[str]:
        """Get the original URL for a short code.

        Malformed codes are rejected before touching the table.

        Args:
            short_code: The short code to lookup

        Returns:
            Original URL or None if not found
        """
        if not is_valid_short_code_format(short_code):
            self.logger.debug(f"Malformed short code: {short_code[:40]!r}")
            return None

        original_url = self.table.lookup(short_code)

        if original_url is None:
            self.logger.warning(f"Short code not found: {short_code}")
            return None

        self.logger.debug(f"Retrieved URL: {short_code} -> {original_url}")
        return original_url

    def get_url_info(self, short_code: str) -> Optional[Dict[str, Any]]:
        """Get complete information about a short URL.

        Args:
            short_code: The short code to lookup

        Returns:
            Dictionary with URL mapping info or None
        """
        if not is_valid_short_code_format(short_code):
            return None

        mapping = self.table.get_mapping(short_code)
        if mapping is None:
            return None

        return {
            "short_code": mapping.short_code,
            "original_url": mapping.original_url,
            "created_at": mapping.created_at,
            "custom": mapping.custom,
        }

    def url_exists(self, short_code: str) -> bool:
        """Check if a short code exists."""
        return is_valid_short_code_format(short_code) and self.table.exists(short_code)

    def get_statistics(self) -> Dict[str, Any]:
        """Get service statistics.

        Returns:
            Dictionary with statistics
        """
        total = self.table.count()
        custom = self.table.count_custom()

        return {
            "total_urls": total,
            "custom_urls": custom,
            "generated_urls": total - custom,
            "storage": "memory",
            "custom_codes_enabled": self.enable_custom_codes,
        }

    def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        try:
            self.table.count()
            storage_healthy = True
        except Exception as e:
            self.logger.error(f"Storage health check failed: {e}")
            storage_healthy = False

        return {
            "storage": storage_healthy,
            "overall": storage_healthy,
        }

    def _raise_claim_failure(self, error, custom_code: Optional[str]) -> None:
        if error is ClaimError.INVALID_FORMAT:
            _, reason = is_valid_short_code(custom_code)
            self.logger.info(f"Rejected custom code {custom_code!r}: {reason}")
            raise ShortURLError(error, "Invalid custom code", reason)

        title, message = _CLAIM_ERROR_TEXT[error]
        if error is GenerationError.EXHAUSTED_RETRIES:
            self.logger.error(
                f"Could not generate a free short code after {self.table.max_attempts} attempts"
            )
        else:
            self.logger.info(f"Rejected custom code {custom_code!r}: {error.value}")
        raise ShortURLError(error, title, message)
