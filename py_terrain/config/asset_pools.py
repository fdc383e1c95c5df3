"""
Decoration pools for the density asset placer.

Each pool covers a band of the 10-level scale and lists weighted asset types
(repeats raise an asset's odds) together with a base placement chance that
grows with activity.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import List, Tuple


class AssetType(str, Enum):
    """Decorative asset identifiers."""

    PINE = "pine"
    DECIDUOUS = "deciduous"
    BUSH = "bush"
    HOUSE = "house"
    HOUSE_B = "houseB"
    CHURCH = "church"
    WINDMILL = "windmill"
    BARN = "barn"
    SHEEP = "sheep"
    COW = "cow"
    CHICKEN = "chicken"
    FENCE = "fence"
    WHEAT = "wheat"
    WELL = "well"
    WHALE = "whale"
    BOAT = "boat"
    FISH = "fish"
    FLAG = "flag"


@dataclass(frozen=True)
class AssetPool:
    """Weighted asset list with a base placement chance."""

    name: str
    types: Tuple[AssetType, ...]
    chance: float


A = AssetType

POOLS = MappingProxyType({
    # Ocean: whales, boats, fish
    "ocean": AssetPool("ocean", (A.WHALE, A.BOAT, A.FISH, A.FISH), 0.18),
    # Shore/grass: bushes
    "shore": AssetPool("shore", (A.BUSH, A.BUSH, A.FENCE), 0.15),
    # Grassland: trees start
    "grass": AssetPool("grass", (A.PINE, A.DECIDUOUS, A.BUSH, A.SHEEP), 0.22),
    # Forest: dense trees
    "forest": AssetPool("forest", (A.PINE, A.PINE, A.DECIDUOUS, A.PINE, A.BUSH), 0.35),
    # Farm: livestock + crops
    "farm": AssetPool("farm", (A.SHEEP, A.COW, A.CHICKEN, A.WHEAT, A.FENCE, A.BARN, A.HOUSE), 0.35),
    # Village: buildings
    "village": AssetPool(
        "village", (A.HOUSE, A.HOUSE_B, A.WINDMILL, A.WELL, A.SHEEP, A.FENCE, A.PINE), 0.40
    ),
    # Town: dense buildings
    "town": AssetPool(
        "town", (A.HOUSE, A.HOUSE_B, A.CHURCH, A.WINDMILL, A.HOUSE, A.FLAG, A.WELL), 0.50
    ),
    # City: max density
    "city": AssetPool(
        "city", (A.CHURCH, A.HOUSE, A.HOUSE_B, A.HOUSE, A.WINDMILL, A.FLAG, A.BARN), 0.55
    ),
})

# Pool name for each band of the 10-level scale
BAND_POOLS: Tuple[str, ...] = (
    "ocean", "ocean", "shore", "grass", "forest", "forest", "farm", "village", "town", "city",
)


def get_pool(name: str) -> AssetPool:
    """
    Get a decoration pool by name.

    Args:
        name: Pool name

    Returns:
        AssetPool

    Raises:
        KeyError: If the pool is unknown
    """
    if name not in POOLS:
        raise KeyError(f"Unknown asset pool '{name}'. Available: {list_pools()}")
    return POOLS[name]


def pool_for_band(band: int) -> AssetPool:
    """Pool used by a 10-level band; out-of-range bands clamp to the ends."""
    return POOLS[BAND_POOLS[max(0, min(band, len(BAND_POOLS) - 1))]]


def list_pools() -> List[str]:
    """List all pool names."""
    return list(POOLS.keys())
