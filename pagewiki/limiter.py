from flask_limiter import Limiter
from flask_limiter.util import get_remote_address


def init_limiter(app):
    """
    Attach a rate limiter to the app using the RATELIMIT_* keys of app.config.
    Falls back to in-memory storage when the configured storage can't be reached.
    Returns:
        Limiter: The limiter bound to the app.
    """
    limiter = Limiter(key_func=get_remote_address)
    try:
        limiter.init_app(app)
        app.logger.info(
            f"Limiter initialized with {app.config['RATELIMIT_STORAGE_URI']} storage"
        )
    except Exception as e:
        app.logger.error(f"Error initializing limiter: {e}")
        app.logger.error("Attempting failover limiter setup")
        limiter = Limiter(
            key_func=get_remote_address,
            default_limits=[app.config["RATELIMIT_DEFAULT"]],
            storage_uri="memory://",
        )
        limiter.init_app(app)
        app.logger.info("Failover limiter initialized with in-memory storage")
    return limiter
