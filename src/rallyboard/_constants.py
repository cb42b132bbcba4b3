"""Internal constants shared across the package."""

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000
DEFAULT_DATA_FILE = "data/state.json"
DEFAULT_PUBLIC_DIR = "public"
DEFAULT_POLL_MS = 1000
DEFAULT_REMOTE_TIMEOUT = 10.0

#: Display pages served as ``/<name>`` from ``<public_dir>/<name>.html``.
DEFAULT_VIEWS: tuple[str, ...] = (
    "controller",
    "singlebar",
    "doublebar",
    "singleplayer",
    "triplebar",
)

# Sent with every remote fetch.
NO_CACHE_HEADERS: dict[str, str] = {
    "cache-control": "no-cache, no-store",
    "pragma": "no-cache",
}

GAME_KEY_PREFIX = "game_"
