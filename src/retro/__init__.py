"""Retro: retry operations according to policies carried by their errors.

An operation signals that it may be retried by raising a RetryableError;
do_with_retry() keeps invoking it until it succeeds, raises something
terminal, or spends the attempt budget of the error it raised.
"""

from retro._version import __version__

from retro.exceptions import RetroError
from retro.protocols import Retryable

# Policies
from retro.policies import (
    DEFAULT_BACKOFF_OFFSET,
    BackoffRetryableError,
    RetryableError,
    StaticRetryableError,
)

# Retry loop
from retro.retry import Attempt, RetryHandler, do_with_retry, with_retry

# Classification
from retro.classify import ErrorClassifier, ErrorCreator, wrap_retryable_error

# Configuration
from retro.models.config import ClassifierConfig, PolicyKind, RetryPolicyConfig

__all__ = [
    "__version__",
    "RetroError",
    "Retryable",
    "DEFAULT_BACKOFF_OFFSET",
    "BackoffRetryableError",
    "RetryableError",
    "StaticRetryableError",
    "Attempt",
    "RetryHandler",
    "do_with_retry",
    "with_retry",
    "ErrorClassifier",
    "ErrorCreator",
    "wrap_retryable_error",
    "ClassifierConfig",
    "PolicyKind",
    "RetryPolicyConfig",
]
