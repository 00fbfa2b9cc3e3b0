"""Claim outcomes and errors for the allocation table."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class ClaimError(str, Enum):
    """Why a custom code claim was refused."""

    INVALID_FORMAT = "invalid_format"
    RESERVED = "reserved"
    ALREADY_EXISTS = "already_exists"


class GenerationError(str, Enum):
    """Why a generated code could not be claimed."""

    EXHAUSTED_RETRIES = "exhausted_retries"


class RandomSourceError(RuntimeError):
    """The secure random source failed.

    This is a fault in the environment, never the result of contention,
    and is raised instead of being returned as an outcome.
    """


@dataclass(frozen=True)
class ClaimOutcome:
    """Result of a claim: the claimed code, or the reason it failed."""

    code: Optional[str] = None
    error: Optional[Union[ClaimError, GenerationError]] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, code: str) -> "ClaimOutcome":
        return cls(code=code)

    @classmethod
    def failure(cls, error: Union[ClaimError, GenerationError], code: Optional[str] = None) -> "ClaimOutcome":
        return cls(code=code, error=error)
