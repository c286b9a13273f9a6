import argparse
import logging
import sys
import traceback
from pathlib import Path

# Project internal imports
from . import config
from .downloader import DownloadManager
from .errors import AptSyncError, ParseError
from .source_parser import load_sources_list
from .sync import AptClient

# --- Logging Setup ---
# Place basicConfig here so logger instances in other modules inherit it
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - [%(threadName)s] %(message)s')
logger = logging.getLogger(__name__) # Get logger for this module


def run_sync_process(args) -> int:
    """Loads the sources list and synchronizes the package indexes. Returns the exit status."""
    output_dir = Path(args.output).resolve()
    logger.info("Starting index synchronization.")
    logger.info(f"Sources List: {args.sources}")
    logger.info(f"Output Directory: {output_dir}")
    logger.info(f"Architecture: {config.ARCHITECTURE}")
    logger.info(f"Download Workers: {args.workers}")

    try:
        registry = load_sources_list(args.sources)
    except ParseError as e:
        logger.error(f"Invalid sources list {args.sources}: {e}")
        return 1
    except OSError as e:
        logger.error(f"Could not read sources list {args.sources}: {e}")
        return 1

    if not len(registry):
        logger.warning("Sources list contains no sources, nothing to do.")
        return 0

    manager = DownloadManager(args.workers, timeout=args.timeout, show_progress=args.progress and not args.debug)
    try:
        client = AptClient(output_dir, registry, manager)
        if args.init_trust:
            trust_dir = client.init_trust_dir()
            logger.info(f"Trust directory: {trust_dir}")
        result = client.update()
    except AptSyncError as e:
        logger.error(f"Synchronization failed: {e}")
        return 1

    logger.info("--- Sync Summary ---")
    logger.info(f"Index files downloaded: {len(result.succeeded)}")
    logger.info(f"Index files extracted: {len(result.extracted)}")
    if result.failed:
        logger.warning(f"Sync finished with {len(result.failed)} failed downloads. The index might be incomplete.")
        for outcome in result.failed:
            logger.warning(f"  failed: {outcome.request.uri}")
        return 1

    logger.info("Sync finished successfully.")
    return 0


def main(argv=None):
    """Parses arguments and starts the sync process."""
    parser = argparse.ArgumentParser(
        description="Download and extract the binary package indexes of the sources in an apt sources list.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter # Show defaults in help
    )
    parser.add_argument("-s", "--sources", default=config.DEFAULT_SOURCES_LIST, help="Path to the sources list.")
    parser.add_argument("-o", "--output", default=config.DEFAULT_OUTPUT_DIR, help="Root directory for the index and trust directories.")
    parser.add_argument("--workers", type=int, default=config.MAX_WORKERS, help="Number of concurrent download workers.")
    parser.add_argument("--timeout", type=float, default=config.REQUEST_TIMEOUT, help="Per-request timeout in seconds (default: none).")
    parser.add_argument("--init-trust", action="store_true", help="Also create the trust/keys and trust/hashes directories.")
    parser.add_argument("--progress", action="store_true", help="Show a download progress bar.")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging (very verbose).")

    args = parser.parse_args(argv)
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    # Adjust logging level based on debug flag
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled.")
    else:
        logging.getLogger().setLevel(logging.INFO)
        # Silence verbose logs from underlying libraries in info mode
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)

    try:
        return run_sync_process(args)
    except KeyboardInterrupt:
        logger.warning("Process interrupted by user.")
        return 1
    except Exception as e:
        logger.error(f"An unexpected critical error occurred: {e}")
        logger.error(traceback.format_exc())
        return 1

if __name__ == "__main__":
     sys.exit(main())
