"""
Enumeration budget: hard bounds on exact enumeration.

Full enumeration of hand supports and draw-sequence trees grows
combinatorially with the number of categories, the draw size and the
turn depth. This module bounds:

- Number of Count Vectors materialized for one support
- Depth of a draw-sequence tree
- Number of tree nodes visited in one traversal

INVARIANTS:
- Bounds are checked BEFORE the expensive work where the size is known
  up front (support size via counting mode, tree depth)
- Exceedance is TERMINAL: no retries, no fallback to sampling
"""

import logging
from dataclasses import dataclass, field

from manaforge.config import settings
from manaforge.models.failure import ResourceError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EnumerationBudget:
    """
    Bounds for one enumeration.

    Defaults come from settings so they can be tuned per deployment
    through MANAFORGE_* environment variables.
    """

    max_support_size: int = field(default_factory=lambda: settings.max_support_size)
    max_tree_depth: int = field(default_factory=lambda: settings.max_tree_depth)
    max_tree_nodes: int = field(default_factory=lambda: settings.max_tree_nodes)

    def check_support_size(self, size: int) -> None:
        """
        Check that a support of ``size`` vectors may be materialized.

        Raises:
            ResourceError: If size exceeds max_support_size
        """
        if size > self.max_support_size:
            logger.warning(
                "Support of %d vectors exceeds bound %d", size, self.max_support_size
            )
            raise ResourceError(
                limit_type="support size",
                requested=size,
                limit=self.max_support_size,
            )

    def check_tree_depth(self, depth: int) -> None:
        """
        Check that a tree may be expanded to ``depth`` turns.

        Raises:
            ResourceError: If depth exceeds max_tree_depth
        """
        if depth > self.max_tree_depth:
            logger.warning("Tree depth %d exceeds bound %d", depth, self.max_tree_depth)
            raise ResourceError(
                limit_type="tree depth",
                requested=depth,
                limit=self.max_tree_depth,
            )

    def check_tree_nodes(self, visited: int) -> None:
        """
        Check the running count of visited tree nodes.

        Raises:
            ResourceError: If visited exceeds max_tree_nodes
        """
        if visited > self.max_tree_nodes:
            logger.warning("Visited %d tree nodes, bound is %d", visited, self.max_tree_nodes)
            raise ResourceError(
                limit_type="tree nodes",
                requested=visited,
                limit=self.max_tree_nodes,
            )
