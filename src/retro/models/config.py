"""Configuration models for Retro.

RetryPolicyConfig describes a retry policy as data and builds the matching
RetryableError. ClassifierConfig pairs a list of message patterns with a
policy and builds an ErrorClassifier.
"""

from __future__ import annotations

import enum
import re
import time

from pydantic import BaseModel, Field, field_validator

from retro.classify import ErrorClassifier, ErrorCreator
from retro.policies import (
    DEFAULT_BACKOFF_OFFSET,
    BackoffRetryableError,
    RetryableError,
    Sleep,
    StaticRetryableError,
)


class PolicyKind(str, enum.Enum):
    """Shape of the wait between attempts."""

    STATIC = "static"
    BACKOFF = "backoff"


class RetryPolicyConfig(BaseModel):
    """Retry policy settings.

    Example::

        config = RetryPolicyConfig(kind="backoff", max_attempts=5)
        raise config.build(ConnectionError("resource not ready"))
    """

    model_config = {"frozen": True}

    kind: PolicyKind = PolicyKind.STATIC
    max_attempts: int = Field(ge=0)
    wait_seconds: float = Field(default=0.0, ge=0)  # static only
    backoff_offset: float = Field(default=DEFAULT_BACKOFF_OFFSET, ge=0)  # backoff only

    def build(self, cause: BaseException, *, sleep: Sleep = time.sleep) -> RetryableError:
        """Wrap ``cause`` in the RetryableError this config describes."""
        if self.kind is PolicyKind.BACKOFF:
            return BackoffRetryableError(
                cause, self.max_attempts, offset=self.backoff_offset, sleep=sleep
            )
        return StaticRetryableError(
            cause, self.max_attempts, self.wait_seconds, sleep=sleep
        )

    def creator(self, *, sleep: Sleep = time.sleep) -> ErrorCreator:
        """Return a builder suitable for wrap_retryable_error()."""

        def create(error: Exception) -> RetryableError:
            return self.build(error, sleep=sleep)

        return create


class ClassifierConfig(BaseModel):
    """Message patterns that should be retried, and how."""

    model_config = {"frozen": True}

    patterns: list[str]
    policy: RetryPolicyConfig

    @field_validator("patterns")
    @classmethod
    def _check_patterns(cls, v: list[str]) -> list[str]:
        for pattern in v:
            try:
                re.compile(pattern)
            except re.error as e:
                raise ValueError(f"Invalid pattern {pattern!r}: {e}") from e
        return v

    def build(self, *, sleep: Sleep = time.sleep) -> ErrorClassifier:
        return ErrorClassifier(self.patterns, self.policy.creator(sleep=sleep))
