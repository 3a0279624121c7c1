"""Bipartite graphs and maximum-cardinality matching (Hopcroft–Karp)."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Optional, Sequence

from .types import MatcherError


@dataclass(frozen=True)
class Node:
    """A graph node: a numeric identity plus the value it stands for."""

    id: int
    value: Any


@dataclass(frozen=True)
class Edge:
    """An undirected edge between the nodes with ids ``node1`` and ``node2``."""

    node1: int
    node2: int


class EdgeSet(list):
    """An ordered collection of edges."""

    def free(self, node: Node) -> bool:
        """Return True if no edge touches ``node``."""
        return all(node.id not in (edge.node1, edge.node2) for edge in self)

    def contains(self, edge: Edge) -> bool:
        return edge in self

    def find_by_nodes(self, node1: Node, node2: Node) -> Optional[Edge]:
        """Return the first edge joining the two nodes, in either direction."""
        wanted = {(node1.id, node2.id), (node2.id, node1.id)}
        return next((edge for edge in self if (edge.node1, edge.node2) in wanted), None)

    def symmetric_difference(self, other: Iterable[Edge]) -> "EdgeSet":
        include: dict[Edge, bool] = {edge: True for edge in self}
        for edge in other:
            include[edge] = not include.get(edge, False)
        return EdgeSet(edge for edge, keep in include.items() if keep)


def odd(n: int) -> bool:
    """Return True for positive odd numbers."""
    return math.fmod(n, 2.0) == 1.0


@dataclass
class BipartiteGraph:
    """Two ordered node sets and the edges running between them."""

    left: list
    right: list
    edges: EdgeSet
    _lookup: dict = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for edge in self.edges:
            self._lookup.setdefault((edge.node1, edge.node2), edge)
            self._lookup.setdefault((edge.node2, edge.node1), edge)

    def _edge(self, a: Node, b: Node) -> Optional[Edge]:
        return self._lookup.get((a.id, b.id))

    def free_left_right(self, edges: Iterable[Edge]) -> tuple[list, list]:
        """Return the values of left and right nodes that no edge in ``edges`` touches."""
        touched = {node_id for edge in edges for node_id in (edge.node1, edge.node2)}
        left_values = [node.value for node in self.left if node.id not in touched]
        right_values = [node.value for node in self.right if node.id not in touched]
        return left_values, right_values

    def largest_matching(self) -> EdgeSet:
        """Return a maximum set of edges of which no two share an endpoint."""
        matching = EdgeSet()
        paths = self._disjoint_augmenting_paths(matching)
        while paths:
            for path in paths:
                matching = matching.symmetric_difference(path)
            paths = self._disjoint_augmenting_paths(matching)
        return matching

    def _disjoint_augmenting_paths(self, matching: EdgeSet) -> list:
        layers = self._guide_layers(matching)
        if not layers:
            return []
        matched = set(matching)
        used: dict[int, bool] = {}
        result = []
        for start in layers[-1]:
            path = self._extend_path(start, [], len(layers) - 1, matched, layers, used)
            if path is not None:
                for edge in path:
                    used[edge.node1] = True
                    used[edge.node2] = True
                result.append(EdgeSet(path))
        return result

    def _extend_path(
        self,
        current: Node,
        path: list,
        level: int,
        matched: set,
        layers: Sequence[list],
        used: dict,
    ) -> Optional[list]:
        used[current.id] = True
        if level == 0:
            return list(path)
        for following in layers[level - 1]:
            if used.get(following.id):
                continue
            edge = self._edge(current, following)
            if edge is None:
                continue
            if (edge in matched) == odd(level):
                continue
            path.append(edge)
            found = self._extend_path(following, path, level - 1, matched, layers, used)
            if found is not None:
                return found
            path.pop()
        used[current.id] = False
        return None

    def _guide_layers(self, matching: EdgeSet) -> list:
        matched = set(matching)
        busy = {node_id for edge in matching for node_id in (edge.node1, edge.node2)}
        used: set[int] = set()

        current = [node for node in self.left if node.id not in busy]
        used.update(node.id for node in current)
        if not current:
            return []
        layers = [current]

        done = False
        while not done:
            last = current
            current = []
            if odd(len(layers)):
                for left_node in last:
                    for right_node in self.right:
                        if right_node.id in used:
                            continue
                        edge = self._edge(left_node, right_node)
                        if edge is None or edge in matched:
                            continue
                        current.append(right_node)
                        used.add(right_node.id)
                        if right_node.id not in busy:
                            done = True
            else:
                for right_node in last:
                    for left_node in self.left:
                        if left_node.id in used:
                            continue
                        edge = self._edge(left_node, right_node)
                        if edge is None or edge not in matched:
                            continue
                        current.append(left_node)
                        used.add(left_node.id)
            if not current:
                return []
            layers.append(current)
        return layers


def build_bipartite_graph(
    left_values: Sequence[Any],
    right_values: Sequence[Any],
    neighbours: Callable[[Any, Any], bool],
) -> BipartiteGraph:
    """Build a graph with an edge wherever ``neighbours(left, right)`` is true."""
    left = [Node(index, value) for index, value in enumerate(left_values)]
    right = [Node(index + len(left), value) for index, value in enumerate(right_values)]
    edges = EdgeSet()
    for left_node in left:
        for right_node in right:
            try:
                adjacent = neighbours(left_node.value, right_node.value)
            except Exception as exc:
                raise MatcherError(
                    f"error determining adjacency for {left_node.value} and {right_node.value}: {exc}"
                ) from exc
            if adjacent:
                edges.append(Edge(left_node.id, right_node.id))
    return BipartiteGraph(left, right, edges)