"""
Name Resolver
Condenses project names and resolves short names to monorepo subprojects
"""

from typing import FrozenSet, Iterable, Optional, Union

from .errors import AmbiguousName, UnresolvedName
from .models import ProjectDefinition, ProjectName

NameLike = Union[str, ProjectName]


def condense_name(name: Optional[NameLike]) -> Optional[ProjectName]:
    """Collapse a name whose group equals its artifact to the short form"""
    if name is None:
        return None
    name = ProjectName.parse(name)
    if name.group == name.artifact:
        return ProjectName(None, name.artifact)
    return name


def project_name(project: Optional[ProjectDefinition]) -> Optional[ProjectName]:
    """Condensed name of a project definition"""
    if project is None:
        return None
    return condense_name(ProjectName(project.group, project.artifact))


def resolve_name(
    valid_names: Iterable[NameLike], query: NameLike
) -> Union[ProjectName, FrozenSet[ProjectName], None]:
    """
    Match `query` against a set of project names.

    Returns the matching name, a frozenset of candidates when a short name
    matches several projects, or None when nothing matches. A qualified name is
    only ever matched exactly (after condensing).
    """
    valid = {ProjectName.parse(n) for n in valid_names}
    query = ProjectName.parse(query)

    if query in valid:
        return query
    condensed = condense_name(query)
    if condensed in valid:
        return condensed

    if query.group is None:
        candidates = frozenset(n for n in valid if n.artifact == query.artifact)
        if len(candidates) == 1:
            return next(iter(candidates))
        return candidates or None

    return None


def resolve_name_strict(valid_names: Iterable[NameLike], query: NameLike) -> ProjectName:
    """Resolve `query` to exactly one project name or raise"""
    result = resolve_name(valid_names, query)
    if result is None:
        raise UnresolvedName(query)
    if isinstance(result, frozenset):
        raise AmbiguousName(query, result)
    return result
