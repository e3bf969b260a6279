"""Typed errors raised by the top-level entry points.

Sub-score functions never raise; only structural preconditions
(weight sums, team sizes, empty populations) are rejected.
"""

from __future__ import annotations


class AffinityError(ValueError):
    """Base class for all validation errors raised by the library."""


class InvalidWeightsError(AffinityError):
    """Sub-score weights are missing, negative, or do not sum to 1.0."""


class InvalidTeamSizeError(AffinityError):
    """Team size is below 1 or the member population is empty."""
