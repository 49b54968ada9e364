"""
Diagnostic Reporting
Renders cycle and conflict diagnostics as text lines and routes them through logging
"""

import logging
from typing import List, Optional

from .config import Config
from .conflicts import ConflictReport, source_label
from .cycle_detector import CycleWarning

logger = logging.getLogger(__name__)

_config: Optional[Config] = None


def get_config() -> Config:
    """The reporting config, read from the environment on first use"""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def configure_logging(config: Optional[Config] = None) -> None:
    """Configure root logging and fix the config used for diagnostics"""
    global _config
    if config is not None:
        _config = config
    config = get_config()
    logging.basicConfig(level=getattr(logging, config.log_level, logging.INFO))


def cycle_warning_lines(warning: CycleWarning) -> List[str]:
    """Describe a relaxed cycle: both edge directions and how it was resolved"""
    root, dep = warning.root, warning.dependency

    if warning.dependency_profile:
        forward = f"{root} depends on {dep} in its {warning.dependency_profile} profile"
    else:
        forward = f"{dep} is a normal dependency of {root}"

    if warning.reverse_profile:
        reverse = f"{dep} depends on {root} in its {warning.reverse_profile} profile"
    else:
        reverse = f"{root} is a normal dependency of {dep}"

    if warning.arbitrary_order:
        resolution = (f"building {root} and {dep} in an arbitrary order "
                      f"relative to one-another.")
    else:
        resolution = f"building {dep} before {root}."

    return [
        f"WARNING: {root} and {dep} form a dependency cycle! "
        f"(Only reporting first cycle, may be more)",
        f"- {forward}",
        f"- {reverse}",
        f"Resolving the cycle by {resolution}",
    ]


def conflict_lines(report: ConflictReport, spec_width: int = 50) -> List[str]:
    """One summary line plus one line per distinct spec and its projects"""
    lines = [
        f"WARN: Multiple dependency specs found for {report.name} in "
        f"{report.project_count} projects - using {report.choice} "
        f"from {source_label(report.choice)}"
    ]
    for spec, projects in report.specs:
        lines.append(f"{str(spec):<{spec_width}} from {' '.join(projects)}")
    return lines


def log_cycle_warning(warning: CycleWarning, config: Optional[Config] = None) -> None:
    config = config or get_config()
    for line in cycle_warning_lines(warning):
        logger.warning(f"{config.log_prefix} {line}")


def log_conflict(report: ConflictReport, config: Optional[Config] = None) -> None:
    config = config or get_config()
    for line in conflict_lines(report, config.spec_width):
        logger.warning(f"{config.log_prefix} {line}")
