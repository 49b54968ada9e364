"""
Dependency Conflict Resolver
Picks one coordinate when subprojects declare a shared dependency differently
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Coordinate, ProjectDefinition, ProjectName
from .names import condense_name, project_name

logger = logging.getLogger(__name__)

UNKNOWN_SOURCE = '<unknown>'


@dataclass(frozen=True)
class ConflictReport:
    """Disagreement between subprojects over one dependency"""
    name: ProjectName
    project_count: int
    choice: Coordinate
    specs: Tuple[Tuple[Coordinate, Tuple[str, ...]], ...]


def source_label(spec: Coordinate) -> str:
    """Display name of the project a spec came from"""
    if spec.source is None:
        return UNKNOWN_SOURCE
    return str(spec.source)


@dataclass(frozen=True)
class DependencySelection:
    choice: Optional[Coordinate]
    conflict: Optional[ConflictReport] = None


def sourced_dependencies(project: ProjectDefinition) -> List[Coordinate]:
    """The project's dependency coordinates, tagged with the project as their source"""
    name = project_name(project)
    return [coord.with_source(name) for coord in project.dependencies]


def resolve_conflict(name, specs: Sequence[Coordinate]) -> DependencySelection:
    """
    Choose a coordinate for `name` from the specs contributed by subprojects.

    Scope is ignored when comparing. The first spec is always the choice; when
    the unscoped specs disagree a ConflictReport is attached.
    """
    if not specs:
        return DependencySelection(None)
    choice = specs[0]
    unscoped = [spec.unscoped() for spec in specs]

    projects_for_specs: Dict[Coordinate, List[str]] = {}
    for spec in unscoped:
        projects_for_specs.setdefault(spec, []).append(source_label(spec))

    if len(projects_for_specs) == 1:
        return DependencySelection(choice)

    report = ConflictReport(
        name=condense_name(name),
        project_count=len({spec.source for spec in unscoped}),
        choice=choice,
        specs=tuple(
            (spec, tuple(sorted(projects))) for spec, projects in projects_for_specs.items()
        ),
    )
    return DependencySelection(choice, report)


def select_dependency(name, specs: Sequence[Coordinate]) -> Optional[Coordinate]:
    """Select a coordinate for `name`, logging a warning if the specs disagree"""
    from .reporting import log_conflict

    selection = resolve_conflict(name, specs)
    if selection.conflict is not None:
        log_conflict(selection.conflict)
    return selection.choice


def merged_dependencies(projects: Iterable[ProjectDefinition]) -> List[Coordinate]:
    """
    Collect the dependencies of every project and select one coordinate per
    dependency name, in first-seen order.
    """
    by_name: Dict[ProjectName, List[Coordinate]] = {}
    for project in projects:
        for coord in sourced_dependencies(project):
            by_name.setdefault(condense_name(coord.name), []).append(coord)
    logger.info(f"Selecting specs for {len(by_name)} distinct dependencies")
    return [select_dependency(name, specs) for name, specs in by_name.items()]
