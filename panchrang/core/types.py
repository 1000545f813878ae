"""Shared record types and the shape checks and channel rounding used across the package."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, NotRequired, TypedDict

import numpy as np


class Color(TypedDict):
    """An RGB colour record. Channels are 0-255."""

    name: str
    r: int
    g: int
    b: int


Palette = list[Color]
Tally = dict[str, int]


class Candidate(TypedDict):
    id: str
    name: str
    party: str


class Voter(TypedDict):
    id: str
    name: str
    age: int | float


class CandidateResult(TypedDict):
    """One row of election results."""

    id: str
    name: str
    party: str
    votes: int


class VoteReceipt(TypedDict):
    """Passed to on_success after a vote is recorded."""

    voter_id: str
    candidate_id: str


class ValidationResult(TypedDict):
    valid: bool
    reason: NotRequired[str]


class RegionTree(TypedDict):
    name: str
    votes: int | float
    sub_regions: list[RegionTree]


Comparator = Callable[[CandidateResult, CandidateResult], Any]


@dataclass(frozen=True)
class VoterRules:
    """Rules closed over by a vote validator."""

    min_age: int | float = 18
    required_fields: tuple[str, ...] = field(default_factory=tuple)


def is_number(value: Any) -> bool:
    """True for int/float values. bool is excluded even though it subclasses int."""
    return isinstance(value, Real) and not isinstance(value, bool)


def is_sequence(value: Any) -> bool:
    """True for list/tuple-like sequences, but not strings or bytes."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def is_record(value: Any) -> bool:
    return isinstance(value, Mapping)


def is_finite_number(value: Any) -> bool:
    """A number that is neither NaN, infinite, nor an int too large for a float."""
    if not is_number(value):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_hashable(value: Any) -> bool:
    # isinstance(x, Hashable) passes tuples holding lists, so ask hash() directly
    try:
        hash(value)
    except TypeError:
        return False
    return True


def round_half_up(values: Any) -> np.ndarray:
    """Round to the nearest integer, with .5 always going up.

    np.round rounds half to even, which would turn 2.5 into 2.
    """
    return np.floor(np.asarray(values, dtype=float) + 0.5)


def clamp_channel(value: Any) -> int:
    """Round half-up and clamp into 0-255."""
    return int(np.clip(round_half_up(value), 0, 255))
