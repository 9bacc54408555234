"""Configuration models for Retro."""

from retro.models.config import ClassifierConfig, PolicyKind, RetryPolicyConfig

__all__ = ["ClassifierConfig", "PolicyKind", "RetryPolicyConfig"]
