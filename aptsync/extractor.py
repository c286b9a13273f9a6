import gzip
import logging
import shutil
import zlib
from pathlib import Path
from typing import Callable

from .config import INDEX_SUFFIX
from .errors import ExtractionError

logger = logging.getLogger(__name__)

def _recreate_file(path: Path):
    """Opens 'path' for writing, deleting any previous file first."""
    path.unlink(missing_ok=True)
    return open(path, 'wb')

def extract_indexes(directory, on_info: Callable[[str], None] | None = None) -> list[Path]:
    """
    Decompresses every '*_Packages.gz' file in 'directory' next to itself, without the '.gz'.
    Existing outputs are always overwritten.
    The first failure raises ExtractionError; files extracted before it are left in place.
    Returns the paths written.
    """
    on_info = on_info or logger.info
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise ExtractionError(f"failed to list index directory {directory}: {e}", directory) from e

    extracted = []
    for entry in entries:
        if not entry.name.endswith(INDEX_SUFFIX) or not entry.is_file():
            continue

        target = entry.with_name(entry.name[:-len(".gz")])
        try:
            with _recreate_file(target) as out, gzip.open(entry, 'rb') as gz:
                shutil.copyfileobj(gz, out)
        except (OSError, EOFError, zlib.error) as e: # gzip.BadGzipFile is an OSError
            logger.error(f"failed to extract {entry.name}")
            raise ExtractionError(f"failed to extract {entry.name}: {e}", entry) from e

        extracted.append(target)
        on_info(f"extracted {entry.name}")

    return extracted
