"""Account domain exceptions."""

from __future__ import annotations


class UsernameAlreadyTaken(Exception):
    """Another user already registered this username."""


class UserNotFound(Exception):
    """No user matches the requested ID or username."""
