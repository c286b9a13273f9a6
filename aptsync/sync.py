import logging
from dataclasses import dataclass, field
from pathlib import Path

from . import config
from .models import FetchRequest, FetchOutcome
from .registry import SourceRegistry
from .downloader import DownloadManager, url_to_filename
from .extractor import extract_indexes
from .trust import init_trust_dir
from .errors import DirectoryError

logger = logging.getLogger(__name__)

def ensure_directory(path: Path) -> Path:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"failed to create directory {path}: {e}")
        raise DirectoryError(f"failed to create directory {path}: {e}", path) from e
    return path


@dataclass
class SyncResult:
    """What one AptClient.update() run did."""
    outcomes: list[FetchOutcome] = field(default_factory=list)
    extracted: list[Path] = field(default_factory=list)

    @property
    def succeeded(self) -> list[FetchOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> list[FetchOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def ok(self) -> bool:
        return not self.failed


class AptClient:
    """Keeps a local copy of the package indexes named by a SourceRegistry under 'root'."""

    def __init__(self, root, registry: SourceRegistry | None = None,
                 download_manager: DownloadManager | None = None):
        self.root = ensure_directory(Path(root))
        self.registry = registry if registry is not None else SourceRegistry()
        self.download_manager = download_manager or DownloadManager(config.MAX_WORKERS)

    @property
    def index_dir(self) -> Path:
        return self.root / config.INDEX_DIR_NAME

    @property
    def trust_dir(self) -> Path:
        return self.root / config.TRUST_DIR_NAME

    def init_trust_dir(self) -> Path:
        return init_trust_dir(self.root)

    def build_requests(self, repo_uris: list[str]) -> list[FetchRequest]:
        """
        One Packages.gz request per repository URI, saved under a flattened name in index_dir.
        URIs mapping to a destination already taken are skipped; two workers never share a file.
        """
        fetch_requests = []
        destinations = set()
        for repo_uri in repo_uris:
            destination = self.index_dir / f"{url_to_filename(repo_uri)}{config.INDEX_SUFFIX}"
            if destination in destinations:
                logger.debug(f"Skipping duplicate index target {destination} for {repo_uri}")
                continue
            destinations.add(destination)
            fetch_requests.append(FetchRequest(
                uri=f"{repo_uri}/binary-{config.ARCHITECTURE}/Packages.gz",
                destination=destination,
            ))
        return fetch_requests

    def update(self) -> SyncResult:
        """
        Downloads and extracts the index of every registered source component.
        Failed downloads are logged and reported in the result; they do not stop the run.
        Raises DirectoryError if the index directory cannot be created and
        ExtractionError if any downloaded index cannot be decompressed.
        """
        logger.info("Updating apt sources...")
        ensure_directory(self.index_dir)

        logger.info("Generating repository URIs")
        repo_uris = self.registry.regenerate_uris()
        fetch_requests = self.build_requests(repo_uris)
        logger.info(f"Submitting {len(fetch_requests)} index file fetch tasks.")

        # Blocks until every fetch finished or failed; extraction must see the final files.
        outcomes = self.download_manager.download(fetch_requests)

        result = SyncResult(outcomes=outcomes)
        if result.failed:
            logger.warning(f"{len(result.failed)} of {len(outcomes)} index downloads failed:")
            for outcome in result.failed:
                logger.warning(f"  {outcome.request.uri}")

        result.extracted = extract_indexes(self.index_dir)
        logger.info(f"Finished: {len(result.succeeded)} downloaded, {len(result.extracted)} extracted.")
        return result
