"""
Errors
Failures raised by name resolution and topological sorting
"""

from typing import Any, Dict, FrozenSet, Hashable, Iterable, List

import networkx as nx


class MonorepoGraphError(Exception):
    """Base class for dependency graph failures"""


class UnresolvedName(MonorepoGraphError):
    """A name matched no monorepo subproject"""

    def __init__(self, name: Any):
        self.name = name
        super().__init__(f"Could not resolve {name} to any monorepo subproject!")


class AmbiguousName(MonorepoGraphError):
    """A short name matched more than one subproject"""

    def __init__(self, name: Any, candidates: Iterable[Any]):
        self.name = name
        self.candidates = sorted(candidates, key=str)
        super().__init__(
            f"Name {name} resolves to multiple monorepo subprojects: "
            + ' '.join(str(c) for c in self.candidates)
        )


class CycleDetected(MonorepoGraphError):
    """The remaining dependency map has a cycle that no profile edge explains"""

    def __init__(self, residual: Dict[Hashable, FrozenSet[Any]]):
        self.residual = residual
        super().__init__("Cannot sort the keys in the given map, cycle detected!")

    @property
    def components(self) -> List[List[Hashable]]:
        """Strongly connected components of the residual map that form cycles"""
        from .graph_builder import to_digraph

        graph = to_digraph(self.residual)
        components = []
        for scc in nx.strongly_connected_components(graph):
            nodes = sorted(scc, key=str)
            if len(nodes) > 1 or graph.has_edge(nodes[0], nodes[0]):
                components.append(nodes)
        return sorted(components, key=lambda c: str(c[0]))
