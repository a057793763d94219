"""
Stage 4: Intra-block Line Ordering
"""

from .line_orderer import LineOrderer

__all__ = ["LineOrderer"]
