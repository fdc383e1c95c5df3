"""
Configuration modules for landscape generation.
"""

from .asset_pools import AssetPool, AssetType, POOLS, get_pool, list_pools, pool_for_band
from .config import Settings, settings

__all__ = ['AssetPool', 'AssetType', 'POOLS', 'get_pool', 'list_pools', 'pool_for_band',
           'Settings', 'settings']
