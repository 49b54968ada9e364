"""
Monorepo Graph
Dependency graph engine for ordering monorepo subprojects and reporting dependency conflicts
"""

from .closure import downstream_keys, upstream_keys
from .conflicts import ConflictReport, merged_dependencies, resolve_conflict, select_dependency
from .cycle_detector import CycleWarning, SortResult, TopologicalSorter, topological_sort
from .errors import AmbiguousName, CycleDetected, MonorepoGraphError, UnresolvedName
from .graph_builder import collect_dependencies, dependency_map
from .models import Coordinate, Dependency, Profile, ProjectDefinition, ProjectName
from .names import condense_name, project_name, resolve_name, resolve_name_strict

__all__ = [
    'AmbiguousName', 'ConflictReport', 'Coordinate', 'CycleDetected', 'CycleWarning',
    'Dependency', 'MonorepoGraphError', 'Profile', 'ProjectDefinition', 'ProjectName',
    'SortResult', 'TopologicalSorter', 'UnresolvedName', 'collect_dependencies',
    'condense_name', 'dependency_map', 'downstream_keys', 'merged_dependencies',
    'project_name', 'resolve_conflict', 'resolve_name', 'resolve_name_strict',
    'select_dependency', 'topological_sort', 'upstream_keys',
]
