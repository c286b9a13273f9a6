import logging
from pathlib import Path

from .config import TRUST_DIR_NAME
from .errors import DirectoryError

logger = logging.getLogger(__name__)

def init_trust_dir(root) -> Path:
    """
    Lays out <root>/trust/keys, <root>/trust/hashes and an empty <root>/trust/hashes/releases.
    Nothing here is verified; the tree only reserves space for keys and hashes.
    Safe to call repeatedly; an existing releases file is left untouched.
    """
    trust_dir = Path(root) / TRUST_DIR_NAME
    keys_dir = trust_dir / "keys" # PGP keys we trust
    hashes_dir = trust_dir / "hashes" # Hashes of files we trust
    releases_file = hashes_dir / "releases"

    for directory in (trust_dir, keys_dir, hashes_dir):
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"failed to create directory {directory}: {e}")
            raise DirectoryError(f"failed to create directory {directory}: {e}", directory) from e

    if not releases_file.exists():
        try:
            releases_file.touch()
        except OSError as e:
            logger.error(f"failed to create releases file {releases_file}: {e}")
            raise DirectoryError(f"failed to create releases file {releases_file}: {e}", releases_file) from e

    logger.debug(f"Trust directory ready: {trust_dir}")
    return trust_dir
