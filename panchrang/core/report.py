"""Report builder: text and JSON output for election results and palettes."""

import json
from collections.abc import Mapping, Sequence
from typing import Any

from panchrang.core.types import CandidateResult, clamp_channel, is_finite_number


def _winner(results: Sequence[CandidateResult]) -> CandidateResult | None:
    # results arrive sorted; a 0-vote leader means nobody voted
    if not results or not results[0].get('votes'):
        return None
    return results[0]


def format_results_text(results: Sequence[CandidateResult], title: str | None = None) -> str:
    """Format results as a ranked, human-readable table."""
    lines = []
    if title:
        lines.append(title)
        lines.append('')

    name_width = max((len(str(row.get('name', ''))) for row in results), default=4)
    for rank, row in enumerate(results, start=1):
        name = str(row.get('name', ''))
        party = str(row.get('party', ''))
        lines.append(f'{rank:>2}. {name:<{name_width}}  {party:<12} {row.get("votes", 0):>6}')

    if lines:
        lines.append('')
    winner = _winner(results)
    total = sum(row.get('votes', 0) for row in results)
    if winner is None:
        lines.append(f'winner: none  ({total} votes)')
    else:
        lines.append(f'winner: {winner["name"]} ({winner["party"]})  {winner["votes"]}/{total} votes')
    return '\n'.join(lines)


def format_results_json(results: Sequence[CandidateResult]) -> str:
    """Format results as JSON."""
    winner = _winner(results)
    obj: dict[str, Any] = {
        'results': [dict(row) for row in results],
        'summary': {
            'candidates': len(results),
            'total_votes': sum(row.get('votes', 0) for row in results),
            'winner': winner['id'] if winner else None,
        },
    }
    return json.dumps(obj, indent=2)


def format_palette_text(palette: Sequence[Any]) -> str:
    """One line per entry: name and hex. Entries that are not colours show '?'."""
    lines = []
    for entry in palette:
        if not isinstance(entry, Mapping):
            lines.append(f'?  {entry!r}')
            continue
        name = entry.get('name', '?')
        if not all(is_finite_number(entry.get(c)) for c in ('r', 'g', 'b')):
            lines.append(f'{name}  ?')
            continue
        r, g, b = (clamp_channel(entry[c]) for c in ('r', 'g', 'b'))
        lines.append(f'{name}  #{r:02x}{g:02x}{b:02x}')
    return '\n'.join(lines)
