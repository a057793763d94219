"""
Stage 6: Cross-block Ordering
"""

from .block_orderer import BlockOrderer, UNRANKED

__all__ = ["BlockOrderer", "UNRANKED"]
