from dataclasses import dataclass
from pathlib import Path
import uuid

@dataclass(frozen=True)
class AptSource:
    """A single `deb` line from a sources list."""
    id: uuid.UUID
    uri: str # http(s), never with a trailing slash
    suite: str # e.g. "jammy", "bookworm-updates"
    components: tuple[str, ...] # at least one, order preserved

    def __post_init__(self):
        # Accept any iterable of components but always store a tuple
        object.__setattr__(self, "components", tuple(self.components))
        if not self.components:
            raise ValueError(f"source {self.uri} has no components")

@dataclass(frozen=True)
class FetchRequest:
    """One index file to download and where to put it."""
    uri: str
    destination: Path

@dataclass
class FetchOutcome:
    """Result of a single FetchRequest. `error` is None on success."""
    request: FetchRequest
    message: str
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def __str__(self):
        if self.error is not None:
            return f"{self.message}: {self.error}"
        return self.message
