"""
Dependency Graph Builder
Converts subproject definitions into a map of project names to their dependency edges
"""

import logging
from typing import Any, Dict, FrozenSet, Hashable, Mapping

import networkx as nx

from .models import Dependency, ProjectDefinition, as_edge
from .names import condense_name

logger = logging.getLogger(__name__)

DependencyMap = Dict[Hashable, FrozenSet[Dependency]]


def collect_dependencies(project: ProjectDefinition) -> FrozenSet[Dependency]:
    """
    Merge the project's top-level dependencies with the dependencies of all its
    profiles, so the project has the full closure needed for build ordering.

    An unconditional dependency always wins over a profile dependency on the
    same target. When several profiles name the same target, the first declared
    profile's tag is kept.
    """
    edges: Dict[Hashable, Dependency] = {}
    for coord in project.dependencies:
        target = condense_name(coord.name)
        edges.setdefault(target, Dependency(target))

    for pname, profile in project.profiles.items():
        for coord in profile.dependencies:
            target = condense_name(coord.name)
            if target not in edges:
                edges[target] = Dependency(target, profile=pname)

    return frozenset(edges.values())


def dependency_map(projects: Mapping[Hashable, ProjectDefinition]) -> DependencyMap:
    """
    Convert a map of project names to definitions into a map of project names
    to the set of edges each one depends on. Names are used as given; resolving
    short names is the caller's job.
    """
    result = {name: collect_dependencies(project) for name, project in projects.items()}
    logger.debug(f"Built dependency map for {len(result)} projects")
    return result


def to_digraph(dependencies: Mapping[Hashable, Any]) -> nx.DiGraph:
    """Export a dependency map as a DiGraph with a `profile` edge attribute"""
    graph = nx.DiGraph()
    for name, deps in dependencies.items():
        graph.add_node(name)
        for dep in deps:
            edge = as_edge(dep)
            graph.add_edge(name, edge.target, profile=edge.profile)
    return graph


def graph_stats(dependencies: Mapping[Hashable, Any]) -> Dict:
    """Get statistics about the dependency graph"""
    graph = to_digraph(dependencies)
    profile_edges = sum(1 for _, _, p in graph.edges(data='profile') if p)
    return {
        'total_projects': graph.number_of_nodes(),
        'total_dependencies': graph.number_of_edges(),
        'profile_dependencies': profile_edges,
        'is_dag': nx.is_directed_acyclic_graph(graph),
    }
