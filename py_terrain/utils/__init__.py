"""
Utility helpers shared by the generation stages.
"""

from .random import hash_string, stage_seed, create_prng, identity_seed
from .sequences import select_evenly

__all__ = ['hash_string', 'stage_seed', 'create_prng', 'identity_seed', 'select_evenly']
