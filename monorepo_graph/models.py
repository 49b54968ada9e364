"""
Data Models
Project names, dependency edges and coordinate declarations for monorepo subprojects
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Hashable, Mapping, Optional, Sequence, Tuple


@dataclass(frozen=True)
class ProjectName:
    """Two-part (group, artifact) name; group is None in the short form"""
    group: Optional[str]
    artifact: str

    @classmethod
    def parse(cls, text: str) -> 'ProjectName':
        """Parse `group/artifact` or a bare `artifact`"""
        if isinstance(text, ProjectName):
            return text
        group, sep, artifact = text.rpartition('/')
        if not sep:
            return cls(None, text)
        return cls(group, artifact)

    def __str__(self) -> str:
        if self.group is None:
            return self.artifact
        return f"{self.group}/{self.artifact}"


@dataclass(frozen=True)
class Dependency:
    """A `consumer -> target` edge. Only the target takes part in equality."""
    target: Hashable
    profile: Optional[str] = field(default=None, compare=False)
    source: Optional[Hashable] = field(default=None, compare=False)


def as_edge(dep: Any) -> Dependency:
    """Treat a bare key as an unconditional edge"""
    if isinstance(dep, Dependency):
        return dep
    return Dependency(dep)


def sort_key(key: Any) -> str:
    return str(key)


def _freeze(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    if isinstance(value, Mapping):
        pairs = ((k, _freeze(v)) for k, v in value.items())
        return tuple(sorted(pairs, key=lambda kv: str(kv[0])))
    if isinstance(value, (set, frozenset)):
        return frozenset(_freeze(v) for v in value)
    return value


def _render(value: Any) -> str:
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, tuple):
        return '[' + ' '.join(_render(v) for v in value) + ']'
    if isinstance(value, frozenset):
        return '#{' + ' '.join(sorted(_render(v) for v in value)) + '}'
    return str(value)


@dataclass(frozen=True)
class Coordinate:
    """A raw dependency declaration: name, version and ordered attributes"""
    name: ProjectName
    version: Optional[str]
    attributes: Tuple[Tuple[str, Any], ...] = ()
    source: Optional[ProjectName] = field(default=None, compare=False)

    @classmethod
    def from_spec(cls, spec: Sequence[Any]) -> 'Coordinate':
        """
        Build a coordinate from the vector form `[name, version, k1, v1, ...]`.
        Attribute keys may be written with or without a leading colon.
        """
        if isinstance(spec, Coordinate):
            return spec
        if not spec:
            raise ValueError("Dependency coordinate must have a name")
        name = ProjectName.parse(spec[0])
        version = spec[1] if len(spec) > 1 else None
        rest = list(spec[2:])
        if len(rest) % 2:
            raise ValueError(f"Coordinate {spec!r} has an attribute without a value")
        attributes = tuple(
            (str(rest[i]).lstrip(':'), _freeze(rest[i + 1])) for i in range(0, len(rest), 2)
        )
        return cls(name, version, attributes)

    def get(self, key: str, default: Any = None) -> Any:
        for k, v in self.attributes:
            if k == key:
                return v
        return default

    @property
    def scope(self) -> Optional[str]:
        return self.get('scope')

    def unscoped(self) -> 'Coordinate':
        """Drop the scope attribute, keeping every other attribute and the source"""
        return replace(self, attributes=tuple(
            (k, v) for k, v in self.attributes if k != 'scope'
        ))

    def with_source(self, project: Optional[ProjectName]) -> 'Coordinate':
        return replace(self, source=project)

    def __str__(self) -> str:
        parts = [str(self.name)]
        if self.version is not None:
            parts.append(f'"{self.version}"')
        for k, v in self.attributes:
            parts.append(f":{k} {_render(v)}")
        return '[' + ' '.join(parts) + ']'


@dataclass
class Profile:
    """A named bundle of extra dependencies"""
    dependencies: Tuple[Coordinate, ...] = ()


@dataclass
class ProjectDefinition:
    """The minimal project shape consumed from the project loader"""
    group: str
    artifact: str
    dependencies: Tuple[Coordinate, ...] = ()
    profiles: Dict[str, Profile] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'ProjectDefinition':
        """Build a definition from a loader mapping"""
        artifact = data.get('artifact') or data.get('name')
        if not artifact:
            raise ValueError("Project definition needs a 'name' or 'artifact'")
        group = data.get('group') or artifact
        profiles = {}
        for pname, profile in (data.get('profiles') or {}).items():
            deps = (profile or {}).get('dependencies') or ()
            profiles[str(pname).lstrip(':')] = Profile(
                tuple(Coordinate.from_spec(d) for d in deps)
            )
        return cls(
            group=group,
            artifact=artifact,
            dependencies=tuple(Coordinate.from_spec(d) for d in data.get('dependencies') or ()),
            profiles=profiles,
        )
