import logging
import uuid
from pathlib import Path
from typing import Callable

from .errors import (
    ParseError,
    UnsupportedOptionsError,
    MalformedLineError,
    UnsupportedTypeError,
    UnsupportedSchemeError,
)
from .models import AptSource
from .registry import SourceRegistry

logger = logging.getLogger(__name__)

SOURCE_TYPE = "deb"
SUPPORTED_SCHEMES = ("http://", "https://")

def source_from_string(line: str, id_factory: Callable[[], uuid.UUID] = uuid.uuid4) -> AptSource:
    """
    Parses one sources list line of the form
    `deb <http(s)-uri> <suite> <component> [<component> ...]`.
    'id_factory' supplies the identifier of the new source; pass a fixed one in tests.
    Raises a ParseError subclass describing the first rule the line breaks.
    """
    # Inline options such as [arch=amd64 signed-by=...] are not supported
    if "[" in line or "]" in line:
        raise UnsupportedOptionsError("inline options are not supported", line)

    fields = line.split()
    # type, uri, suite and at least one component
    if len(fields) < 4:
        raise MalformedLineError(f"invalid source string: {line!r}", line)

    if fields[0] != SOURCE_TYPE:
        raise UnsupportedTypeError(f"only binary (deb) repositories are supported: {line!r}", line)

    if not fields[1].startswith(SUPPORTED_SCHEMES):
        raise UnsupportedSchemeError(f"invalid URI (only http(s) are supported): {fields[1]}", line)

    source = AptSource(
        id=id_factory(),
        uri=fields[1].rstrip("/"),
        suite=fields[2],
        components=fields[3:],
    )
    logger.debug(f"Parsed source {source.id}: {source.uri} {source.suite} {' '.join(source.components)}")
    return source


def is_ignorable_line(line: str) -> bool:
    """Blank lines and '#' comments carry no source declaration."""
    stripped = line.strip()
    return not stripped or stripped.startswith("#")


def strip_comment(line: str) -> str:
    """Drops a trailing '# ...' comment, as apt does."""
    return line.split("#", 1)[0]


def parse_sources_list(lines, id_factory: Callable[[], uuid.UUID] = uuid.uuid4) -> list[AptSource]:
    """
    Parses an iterable of sources list lines, skipping blanks and comments.
    Trailing comments are removed before a line is parsed.
    The first bad line aborts parsing; its ParseError carries the 1-based line number.
    """
    sources = []
    for lineno, line in enumerate(lines, start=1):
        if is_ignorable_line(line):
            continue
        try:
            sources.append(source_from_string(strip_comment(line), id_factory))
        except ParseError as e:
            e.lineno = lineno
            raise
    return sources


def load_sources_list(path, id_factory: Callable[[], uuid.UUID] = uuid.uuid4) -> SourceRegistry:
    """Reads a sources list file into a new SourceRegistry."""
    path = Path(path)
    # Undecodable bytes become U+FFFD instead of failing the load
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        sources = parse_sources_list(f, id_factory)

    registry = SourceRegistry()
    registry.add_all(sources)
    logger.info(f"Loaded {len(sources)} source(s) from {path}")
    return registry
