"""
Cycle-Tolerant Topological Sorter
Orders subprojects so dependencies come first, relaxing cycles made only of profile edges
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Set

from .errors import CycleDetected
from .models import Dependency, as_edge, sort_key

logger = logging.getLogger(__name__)

_PROFILE_EDGE = 'profile-edge'


@dataclass(frozen=True)
class CycleWarning:
    """The first cycle a sort had to break by treating profile edges specially"""
    root: Hashable
    dependency: Hashable
    dependency_profile: Optional[str]
    reverse_profile: Optional[str]
    arbitrary_order: bool


@dataclass
class SortResult:
    order: List[Hashable] = field(default_factory=list)
    warning: Optional[CycleWarning] = None


def _identity(edge: Dependency) -> Hashable:
    return edge.target


def _qualify(edge: Dependency) -> Hashable:
    # Profile edges subtract a synthetic key that never matches a node.
    if edge.profile is not None:
        return (_PROFILE_EDGE, edge.target)
    return edge.target


class TopologicalSorter:
    """Peels dependency-free consumers off a dependency map until it is empty"""

    def __init__(self, dependencies: Mapping[Hashable, Iterable[Any]]):
        self.dependencies: Dict[Hashable, Dict[Hashable, Dependency]] = {}
        for name, deps in dependencies.items():
            edges: Dict[Hashable, Dependency] = {}
            for dep in deps:
                edge = as_edge(dep)
                current = edges.get(edge.target)
                if current is None or (current.profile is not None and edge.profile is None):
                    edges[edge.target] = edge
            self.dependencies[name] = edges

    def sort(self, keys: Optional[Iterable[Hashable]] = None) -> SortResult:
        """
        Order every key so that no key appears before something it transitively
        depends on. When `keys` is given, the full order is filtered down to
        those keys.

        Raises CycleDetected when a cycle remains even after ignoring profile
        edges.
        """
        remaining = {name: dict(edges) for name, edges in self.dependencies.items()}
        layers: List[List[Hashable]] = []
        warning: Optional[CycleWarning] = None

        while remaining:
            roots = self._find_roots(remaining, _identity)
            if not roots:
                roots = self._find_roots(remaining, _qualify)
                if not roots:
                    raise CycleDetected({
                        name: frozenset(edges.values()) for name, edges in remaining.items()
                    })
                if warning is None:
                    warning = self._describe_cycle(remaining, roots)
            for root in roots:
                del remaining[root]
            layers.append(sorted(roots, key=sort_key))

        order = [name for layer in reversed(layers) for name in layer]
        if keys is not None:
            wanted = set(keys)
            order = [name for name in order if name in wanted]
        logger.debug(f"Sorted {len(order)} projects in {len(layers)} layers")
        return SortResult(order=order, warning=warning)

    @staticmethod
    def _find_roots(remaining: Dict[Hashable, Dict[Hashable, Dependency]], f) -> Set[Hashable]:
        """Keys nothing else in `remaining` depends on, with edges mapped through f"""
        depended_on = {f(edge) for edges in remaining.values() for edge in edges.values()}
        return set(remaining) - depended_on

    @staticmethod
    def _describe_cycle(
        remaining: Dict[Hashable, Dict[Hashable, Dependency]], roots: Set[Hashable]
    ) -> Optional[CycleWarning]:
        """Find a root and a dependency of it that depends straight back on the root"""
        for root in sorted(roots, key=sort_key):
            edges = remaining[root]
            for target in sorted(edges, key=sort_key):
                reverse = remaining.get(target, {}).get(root)
                if reverse is None:
                    continue
                return CycleWarning(
                    root=root,
                    dependency=target,
                    dependency_profile=edges[target].profile,
                    reverse_profile=reverse.profile,
                    arbitrary_order=target in roots,
                )
        return None


def topological_sort(
    dependencies: Mapping[Hashable, Iterable[Any]],
    keys: Optional[Iterable[Hashable]] = None,
) -> List[Hashable]:
    """
    Returns the keys of `dependencies` ordered such that earlier keys do not
    transitively depend on later keys, logging the first relaxed cycle if any.
    """
    from .reporting import log_cycle_warning

    result = TopologicalSorter(dependencies).sort(keys)
    if result.warning is not None:
        log_cycle_warning(result.warning)
    return result.order
