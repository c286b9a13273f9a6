import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

import requests
from tqdm import tqdm

from .models import FetchRequest, FetchOutcome
from .config import CHUNK_SIZE, REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)

def url_to_filename(url: str) -> str:
    """
    Flattens a repository URL into a single file name.
    e.g. http://archive.ubuntu.com:80/ubuntu/dists/jammy/main -> archive.ubuntu.com-80_ubuntu_dists_jammy_main
    """
    for prefix in ("http://", "https://"):
        if url.startswith(prefix):
            url = url[len(prefix):]
            break
    if url.endswith("/"):
        url = url[:-1]
    return url.replace("/", "_").replace(":", "-")

def _remove_partial(path: Path):
    try:
        path.unlink(missing_ok=True)
        logger.debug(f"Deleted partial file after error: {path}")
    except OSError as unlink_err:
        logger.error(f"Error deleting partial file {path} after error: {unlink_err}")

def fetch_index(request: FetchRequest, session: requests.Session, timeout=REQUEST_TIMEOUT) -> FetchOutcome:
    """
    Downloads a single index file described by FetchRequest.
    Never raises for transport or file errors; they are returned as a failed FetchOutcome.
    """
    logger.debug(f"Attempting download: {request.uri}")
    try:
        response = session.get(request.uri, stream=True, timeout=timeout, allow_redirects=True)
    except requests.exceptions.RequestException as e:
        return FetchOutcome(request, f"failed to download {request.uri}", e)

    try:
        try:
            response.raise_for_status() # 4xx/5xx are transport failures too
        except requests.exceptions.HTTPError as e:
            return FetchOutcome(request, f"failed to download {request.uri}", e)

        try:
            f = open(request.destination, 'wb')
        except OSError as e:
            return FetchOutcome(request, f"failed to create file {request.destination}", e)

        try:
            with f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
        except (requests.exceptions.RequestException, OSError) as e:
            _remove_partial(request.destination)
            return FetchOutcome(request, f"failed to write file {request.destination}", e)
    finally:
        response.close()

    return FetchOutcome(request, f"downloaded {request.uri} to {request.destination}")


class DownloadManager:
    """
    Runs batches of FetchRequests on a pool of worker threads.
    A fresh pool is created for every download() call and torn down before it returns.
    """

    def __init__(self, workers: int, session: requests.Session | None = None,
                 timeout=REQUEST_TIMEOUT, show_progress: bool = False):
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.workers = workers
        self.session = session
        self.timeout = timeout
        self.show_progress = show_progress

    def _new_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({'User-Agent': USER_AGENT})
        return session

    def download(self, fetch_requests: list[FetchRequest],
                 on_info: Callable[[str], None] | None = None,
                 on_error: Callable[[str], None] | None = None) -> list[FetchOutcome]:
        """
        Downloads every request and blocks until each one has produced exactly one outcome.
        Successful outcomes are reported to 'on_info', failures to 'on_error', in completion order.
        Returns all outcomes, also in completion order.
        """
        on_info = on_info or logger.info
        on_error = on_error or logger.error
        outcomes: list[FetchOutcome] = []
        if not fetch_requests:
            return outcomes

        own_session = self.session is None
        session = self._new_session() if own_session else self.session
        logger.debug(f"Downloading {len(fetch_requests)} file(s) with {self.workers} worker(s)")
        try:
            with tqdm(total=len(fetch_requests), desc="Fetching Indices", unit="file",
                      smoothing=0.1, disable=not self.show_progress) as pbar:
                with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="IndexFetch") as executor:
                    future_to_request = {
                        executor.submit(fetch_index, request, session, self.timeout): request
                        for request in fetch_requests
                    }

                    for future in as_completed(future_to_request):
                        request = future_to_request[future]
                        try:
                            outcome = future.result()
                        except Exception as exc:
                            outcome = FetchOutcome(request, f"{request.uri} generated an exception during download", exc)
                        pbar.update(1)
                        outcomes.append(outcome)
                        if outcome.ok:
                            on_info(str(outcome))
                        else:
                            on_error(str(outcome))
        finally:
            if own_session:
                session.close()

        return outcomes
