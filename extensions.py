"""Flask extension instances bound to the application in ``create_app``."""

from flask import current_app
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate

migrate = Migrate()
cors = CORS()
# The global limit is read per request so each app applies its own RATE_LIMIT.
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[lambda: current_app.config["RATE_LIMIT"]],
)
