"""Error types raised by the organ-tree engine."""

from __future__ import annotations


class OrganTreeError(Exception):
    """Base class for all organ-tree errors."""


class ConfigurationError(OrganTreeError):
    """A prototype is missing, foreign, or otherwise misconfigured."""


class IndexingFault(OrganTreeError, IndexError):
    """Out-of-range node, child, or segment access, or broken delta bookkeeping."""


class UnknownOrganKindError(OrganTreeError, KeyError):
    """An organ kind name or number is not in the kind table."""

    def __init__(self, value: object):
        super().__init__(value)
        self.value = value

    def __str__(self) -> str:
        return f"unknown organ kind {self.value!r}"


class GrowthContractError(OrganTreeError):
    """A growth policy asked for a change the organ cannot apply."""
