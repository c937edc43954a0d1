"""Interior connectivity of polygons.

The rings of a polygon and the points where they touch form a bipartite
graph: every ring is linked to every distinct touch point lying on it. The
interior of the polygon is disconnected exactly when this graph contains a
cycle, for instance a hole touching the exterior twice, or a chain of holes
touching each other and the exterior in a loop.
"""

from typing import Dict, Hashable, Optional, Set, Tuple

from ..relate import XY

Node = Tuple[str, Hashable]


class TouchGraph:
    """Bipartite ring / touch point graph with union-find cycle detection.

    Examples:
        >>> graph = TouchGraph()
        >>> graph.add_touch(0, (5.0, 0.0))
        False
        >>> graph.add_touch(1, (5.0, 0.0))
        False
        >>> graph.add_touch(0, (0.0, 5.0))
        False
        >>> graph.add_touch(1, (0.0, 5.0))
        True
        >>> graph.cycle_ring
        1
    """

    def __init__(self):
        self._parent: Dict[Node, Node] = {}
        self._links: Set[Tuple[int, XY]] = set()
        self.cycle_ring: Optional[int] = None

    @property
    def has_cycle(self) -> bool:
        return self.cycle_ring is not None

    def add_touch(self, ring: int, point: XY) -> bool:
        """Link a ring to a touch point lying on it.

        Linking the same ring and point twice is a no-op.

        Args:
            ring: Ring index, 0 for the exterior
            point: Touch point

        Returns:
            True if this link closed the first cycle of the graph
        """
        if (ring, point) in self._links:
            return False
        self._links.add((ring, point))

        root_ring = self._find(('ring', ring))
        root_point = self._find(('point', point))
        if root_ring == root_point:
            if self.cycle_ring is None:
                self.cycle_ring = ring
                return True
            return False
        self._parent[root_ring] = root_point
        return False

    def _find(self, node: Node) -> Node:
        self._parent.setdefault(node, node)
        while self._parent[node] != node:
            self._parent[node] = self._parent[self._parent[node]]
            node = self._parent[node]
        return node


__all__ = [
    'TouchGraph',
]
