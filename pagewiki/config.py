from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
TEMPLATE_DIR = BASE_DIR / "templates"
LOG_DIR = "logs"
LOG_NAME = "wiki.log"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(module)s - %(message)s"

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_THREADS = 4

PAGE_SUFFIX = ".txt"
PAGE_FILE_MODE = 0o600
TEMPLATE_NAMES = ("view", "edit")

DEFAULT_CONFIG = {
    "VERSION": "0.1.0",
    "SECRET_KEY": None,
    "MAX_CONTENT_LENGTH": 16 * 1024 * 1024,  # 16 MB
    "WIKI_DATA_DIR": ".",
    "WIKI_TEMPLATE_DIR": str(TEMPLATE_DIR),
    "WIKI_LOG_DIR": LOG_DIR,
    "WIKI_LOG_NAME": LOG_NAME,
    "WIKI_LOG_FORMAT": LOG_FORMAT,
    "WIKI_LOG_LEVEL": "DEBUG",
    "WIKI_LOG_BACKUPS": 7,
    "WIKI_RENDER_MARKDOWN": False,
    "WIKI_PROXY_FIX": False,
    # Plain form posts to /save/<title> must keep working unless this is switched on
    "WTF_CSRF_ENABLED": False,
    "RATELIMIT_ENABLED": True,
    "RATELIMIT_DEFAULT": "50000 per day;1000 per hour",
    "RATELIMIT_STORAGE_URI": "memory://",
}


def build_config(overrides=None) -> dict:
    """
    Merge caller overrides on top of DEFAULT_CONFIG.
    Args:
        overrides (dict): Keys to replace. None values are ignored so that unset
            command line options fall back to the defaults.
    Returns:
        dict: A new config mapping ready for app.config.update().
    """
    config = dict(DEFAULT_CONFIG)
    for key, value in (overrides or {}).items():
        if value is not None:
            config[key] = value
    return config
