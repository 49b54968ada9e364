"""
Closure Calculator
Breadth-first reachability over a dependency map, in either edge direction
"""

from collections import deque
from typing import Any, Dict, Hashable, Iterable, Mapping, Set

from .models import as_edge


def _targets(deps: Iterable[Any]) -> Set[Hashable]:
    return {as_edge(d).target for d in deps}


def _bfs(root: Hashable, neighbors) -> Set[Hashable]:
    result: Set[Hashable] = set()
    queue = deque([root])
    while queue:
        node = queue.popleft()
        if node in result:
            continue
        result.add(node)
        queue.extend(neighbors(node) - result)
    return result


def upstream_keys(dependencies: Mapping[Hashable, Any], root: Hashable) -> Set[Hashable]:
    """
    Returns the set of keys upstream of `root` in the dependency map, i.e.
    everything it transitively depends on. Includes the root itself.
    """
    return _bfs(root, lambda node: _targets(dependencies.get(node, ())))


def downstream_keys(dependencies: Mapping[Hashable, Any], root: Hashable) -> Set[Hashable]:
    """
    Returns the set of keys downstream of `root` in the dependency map, i.e.
    everything that transitively depends on it. Includes the root itself.
    """
    consumers: Dict[Hashable, Set[Hashable]] = {}
    for name, deps in dependencies.items():
        for target in _targets(deps):
            consumers.setdefault(target, set()).add(name)
    return _bfs(root, lambda node: consumers.get(node, set()))
