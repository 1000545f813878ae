"""panchrang — Holi colour mixing and panchayat election exercises.

Two independent groups of small functions:
  panchrang.colors    pure transformations over colour records and palettes
  panchrang.election  an election handle plus validator, region and tally helpers
"""

from panchrang.colors import (
    add_to_palette,
    adjust_brightness,
    color_from_hex,
    color_to_hex,
    merge_palettes,
    mix_colors,
    remove_from_palette,
)
from panchrang.election import (
    Election,
    count_votes_in_regions,
    create_election,
    create_vote_validator,
    tally_pure,
)

__all__ = [
    'Election',
    'add_to_palette',
    'adjust_brightness',
    'color_from_hex',
    'color_to_hex',
    'count_votes_in_regions',
    'create_election',
    'create_vote_validator',
    'merge_palettes',
    'mix_colors',
    'remove_from_palette',
    'tally_pure',
]
