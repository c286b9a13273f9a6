# Sources list read when no --sources path is given.
# One `deb <uri> <suite> <component>...` declaration per line.
DEFAULT_SOURCES_LIST = "./sources.list"
DEFAULT_OUTPUT_DIR = "./aptsync"

ARCHITECTURE = "amd64" # Only a single binary architecture is mirrored
INDEX_DIR_NAME = "index"
TRUST_DIR_NAME = "trust"
INDEX_SUFFIX = "_Packages.gz"

MAX_WORKERS = 10 # Default concurrent downloads
CHUNK_SIZE = 1024 * 1024 # 1 MB chunks for download
REQUEST_TIMEOUT = None # seconds; None leaves it to the transport default
USER_AGENT = "Python-Apt-Index-Sync/1.0"
