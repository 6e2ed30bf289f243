"""
Reader for the line-oriented feature definition format.

Each definition line has the form::

    name <tabs> type [<tabs> child1 child2 ...]

Lines whose first non-space character is '#' are comments. Blank lines are
ignored. Lines may appear in any order; the feature graph resolves child
references only after every name has been registered.
"""

import io
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import IO

from phonology.utils.config import get_settings
from phonology.utils.errors import PhonologyError, ValidationError
from phonology.utils.logging import diagnostic, setup_logging

logger = setup_logging(__name__)

DEFINITION_PATTERN = re.compile(r"^\s*([^#\s]\S*)\t+(\S+)(?:\s+(.*?))?\s*$")
COMMENT_PREFIX = "#"


@dataclass
class DefinitionLine:
    """One parsed definition line."""

    name: str
    type: str
    children: list[str] = field(default_factory=list)
    line_number: int = 0


def parse_definitions(lines: Iterable[str]) -> Iterator[DefinitionLine]:
    """Parse definition lines, skipping comments and blank lines.

    Malformed lines are reported as diagnostics and skipped.

    Args:
        lines: Lines of definition text

    Yields:
        Parsed definitions in source order
    """
    for line_number, raw in enumerate(lines, start=1):
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue

        match = DEFINITION_PATTERN.match(line)
        if not match:
            diagnostic(ValidationError(
                f"Malformed feature definition on line {line_number}: {stripped!r}",
                suggestions=["Separate name, type and children with tabs"],
                context={"line": line_number},
            ))
            continue

        name, type_name, children = match.groups()
        yield DefinitionLine(
            name=name,
            type=type_name,
            children=children.split() if children else [],
            line_number=line_number,
        )


def open_default(suffix: str) -> IO[str]:
    """Open the bundled default resource named ``default.<suffix>``.

    A configured ``default_features_path`` replaces the bundled feature set.

    Raises:
        PhonologyError: If no such resource exists
    """
    if suffix == "features":
        override = get_settings().get_default_features_path()
        if override is not None:
            logger.debug(f"Using configured default features from {override}")
            return override.open(encoding="utf-8")

    resource = resources.files("phonology.data").joinpath(f"default.{suffix}")
    if not resource.is_file():
        raise PhonologyError(
            f"Couldn't open default.{suffix}",
            context={"suffix": suffix},
        )
    return io.StringIO(resource.read_text(encoding="utf-8"))


def read_source(source: str | Path | IO[str] | None) -> list[str]:
    """Read every line from a path, an open text stream, or the default set."""
    if source is None:
        with open_default("features") as stream:
            return stream.readlines()
    if isinstance(source, (str, Path)):
        with open(source, encoding="utf-8") as stream:
            return stream.readlines()
    return source.readlines()
