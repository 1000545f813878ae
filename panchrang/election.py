"""Panchayat election: a small voting simulation.

create_election(candidates) returns an Election handle. Its tally and voter
sets are private to that instance; each call makes an independent election.

    election = create_election([
        {'id': 'C1', 'name': 'Sarpanch Ram', 'party': 'Janata'},
        {'id': 'C2', 'name': 'Pradhan Sita', 'party': 'Lok'},
    ])
    election.register_voter({'id': 'V1', 'name': 'Mohan', 'age': 25})
    election.cast_vote('V1', 'C1', lambda r: 'voted!', lambda e: f'error: {e}')
    # => 'voted!'

The module also has the standalone helpers: create_vote_validator (a
validator factory), count_votes_in_regions (recursive sum over a region
tree) and tally_pure (returns a new tally with one vote added).

Bad data never raises. It is reported through a return value or the
on_error callback.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from functools import cmp_to_key
from typing import Any

from panchrang.core.env import get_settings
from panchrang.core.log import get_logger
from panchrang.core.types import (
    Candidate,
    CandidateResult,
    Comparator,
    Tally,
    ValidationResult,
    VoteReceipt,
    VoterRules,
    is_hashable,
    is_number,
    is_record,
    is_sequence,
)

logger = get_logger('election')

VOTER_NOT_REGISTERED = 'Voter not registered'
CANDIDATE_NOT_FOUND = 'Candidate does not exist'
ALREADY_VOTED = 'Voter already voted'


class Election:
    """Handle over one election's private state.

    Build it with create_election(). State changes only through
    register_voter() and cast_vote().
    """

    def __init__(self, candidates: Sequence[Mapping[str, Any]], voting_age: int | float | None = None):
        if not is_sequence(candidates):
            raise TypeError(f'candidates must be a list of records, got {type(candidates).__name__}')
        for candidate in candidates:
            if not is_record(candidate):
                raise TypeError(f'candidate must be a record, got {type(candidate).__name__}')

        self._candidates: tuple[Candidate, ...] = tuple(
            {'id': c.get('id'), 'name': c.get('name'), 'party': c.get('party')} for c in candidates
        )
        self._votes: dict[Any, int] = {c['id']: 0 for c in self._candidates}
        self._registered: set[Any] = set()
        self._voted: set[Any] = set()
        self._voting_age = get_settings().voting_age if voting_age is None else voting_age

    def __repr__(self) -> str:
        return (
            f'<Election candidates={len(self._candidates)} '
            f'registered={len(self._registered)} votes={self.total_votes}>'
        )

    @property
    def total_votes(self) -> int:
        return len(self._voted)

    def is_registered(self, voter_id: Any) -> bool:
        return is_hashable(voter_id) and voter_id in self._registered

    def has_voted(self, voter_id: Any) -> bool:
        return is_hashable(voter_id) and voter_id in self._voted

    def tally(self) -> Tally:
        """Snapshot of the vote counts. Changing it does not affect the election."""
        return dict(self._votes)

    def register_voter(self, voter: Any) -> bool:
        """Register a voter. False if invalid, under age, or already registered."""
        if not is_record(voter) or not voter.get('id') or not voter.get('name') or not is_hashable(voter['id']):
            logger.debug('rejected voter record: %r', voter)
            return False
        age = voter.get('age')
        if not is_number(age) or age < self._voting_age:
            logger.debug('rejected voter %s: age %r below %s', voter['id'], age, self._voting_age)
            return False
        if voter['id'] in self._registered:
            logger.debug('voter %s already registered', voter['id'])
            return False
        self._registered.add(voter['id'])
        logger.debug('registered voter %s', voter['id'])
        return True

    def cast_vote(
        self,
        voter_id: Any,
        candidate_id: Any,
        on_success: Callable[[VoteReceipt], Any],
        on_error: Callable[[str], Any],
    ) -> Any:
        """Record a vote and return whatever the invoked callback returns.

        Checks run in order: voter registered, candidate exists, voter has not
        voted yet. The first failure calls on_error with its reason. On success
        on_success gets {'voter_id': ..., 'candidate_id': ...}, snake_case keys
        rather than voterId / candidateId.
        """
        if not self.is_registered(voter_id):
            reason = VOTER_NOT_REGISTERED
        elif not is_hashable(candidate_id) or candidate_id not in self._votes:
            reason = CANDIDATE_NOT_FOUND
        elif self.has_voted(voter_id):
            reason = ALREADY_VOTED
        else:
            self._voted.add(voter_id)
            self._votes[candidate_id] += 1
            logger.debug('voter %s voted for %s', voter_id, candidate_id)
            return on_success({'voter_id': voter_id, 'candidate_id': candidate_id})

        logger.debug('vote by %s for %s refused: %s', voter_id, candidate_id, reason)
        return on_error(reason)

    def get_results(self, sort_fn: Comparator | None = None) -> list[CandidateResult]:
        """One result per candidate, sorted by sort_fn or by votes descending.

        sort_fn is a two-argument comparator (negative, zero, positive).
        The sort is stable, so ties keep the order candidates were given in.
        """
        results: list[CandidateResult] = [
            {'id': c['id'], 'name': c['name'], 'party': c['party'], 'votes': self._votes[c['id']]}
            for c in self._candidates
        ]
        if sort_fn is not None:
            return sorted(results, key=cmp_to_key(sort_fn))
        return sorted(results, key=lambda row: -row['votes'])

    def get_winner(self) -> CandidateResult | None:
        """Leader by votes; first candidate wins a tie. None when nobody has voted."""
        results = self.get_results()
        if not results or results[0]['votes'] == 0:
            return None
        return results[0]


def create_election(candidates: Sequence[Mapping[str, Any]]) -> Election:
    """Start a new election over the given candidates."""
    return Election(candidates)


def create_vote_validator(rules: Mapping[str, Any] | None = None) -> Callable[[Any], ValidationResult]:
    """Return a validator closed over rules.

    rules:
        min_age: minimum age; missing or non-numeric means the configured voting age (18)
        required_fields: field names that must be present, checked in order

    The camelCase spellings minAge / requiredFields are accepted too.
    """
    rules = rules if is_record(rules) else {}
    required = _pick(rules, 'required_fields', 'requiredFields', ())
    min_age = _pick(rules, 'min_age', 'minAge', None)
    config = VoterRules(
        min_age=min_age if is_number(min_age) else get_settings().voting_age,
        required_fields=tuple(required) if is_sequence(required) else (),
    )

    def validate(voter: Any) -> ValidationResult:
        if not is_record(voter):
            return {'valid': False, 'reason': 'Invalid voter object'}
        for name in config.required_fields:
            if not is_hashable(name) or name not in voter:
                return {'valid': False, 'reason': f'Missing required field: {name}'}
        age = voter.get('age')
        if is_number(age) and age < config.min_age:
            return {'valid': False, 'reason': f'Voter age must be at least {config.min_age}'}
        return {'valid': True}

    return validate


def count_votes_in_regions(region_tree: Any) -> int | float:
    """Total votes in a region and all of its sub-regions.

    An invalid node (no numeric 'votes') counts as 0. The tree must be finite
    and acyclic.
    """
    if not is_record(region_tree) or not is_number(region_tree.get('votes')):
        return 0
    total = region_tree['votes']
    children = _pick(region_tree, 'sub_regions', 'subRegions', None)
    if is_sequence(children):
        for child in children:
            total += count_votes_in_regions(child)
    return total


def tally_pure(current_tally: Any, candidate_id: Any) -> Tally:
    """New tally with candidate_id incremented by one. current_tally is left alone.

    A non-string candidate_id gives a plain copy; a tally that is not a
    mapping becomes {}.
    """
    if not is_record(current_tally):
        return {}
    if not isinstance(candidate_id, str):
        return dict(current_tally)
    return {**current_tally, candidate_id: (current_tally.get(candidate_id) or 0) + 1}


def _pick(record: Mapping[str, Any], key: str, alias: str, default: Any) -> Any:
    if key in record:
        return record[key]
    return record.get(alias, default)
