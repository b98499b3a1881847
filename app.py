"""Application factory."""

import logging
import sys
import uuid
from datetime import UTC, datetime

import click
from flask import Flask, g, jsonify, request, send_from_directory
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException, NotFound, TooManyRequests
from werkzeug.middleware.proxy_fix import ProxyFix

from config import Config
from extensions import cors, limiter, migrate
from models import db
from routes.auth import auth_bp
from routes.blog import blog_bp
from routes.contact import contact_bp
from routes.experience import experience_bp
from routes.portfolio import portfolio_bp
from routes.testimonials import testimonials_bp
from routes.uploads import upload_bp
from services.auth import AuthService
from services.mailer import Mailer
from services.uploads import UploadService
from utils.errors import RateLimitError

API_TITLE = "Portfolio Backend API"
API_RELEASE = "1.0.0"

BLUEPRINTS = (
    (auth_bp, "auth"),
    (portfolio_bp, "portfolio"),
    (experience_bp, "experience"),
    (blog_bp, "blog"),
    (contact_bp, "contact"),
    (testimonials_bp, "testimonials"),
    (upload_bp, "upload"),
)

logger = logging.getLogger(__name__)


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_class)

    _configure_logging(app)

    # Client address from X-Forwarded-For, trusting TRUST_PROXY hops.
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=app.config["TRUST_PROXY"], x_proto=1)

    # Core subsystems
    db.init_app(app)
    migrate.init_app(app, db)

    # CORS
    cors.init_app(
        app,
        resources={r"/*": {"origins": app.config.get("CORS_ORIGINS", "*")}},
        supports_credentials=True,
    )

    # Rate limiting
    app.config["RATELIMIT_KEY_PREFIX"] = (
        app.config.get("RATELIMIT_KEY_PREFIX") or str(uuid.uuid4())
    )
    limiter.init_app(app)

    # Services
    app.extensions["auth_service"] = AuthService.from_config(app.config)
    app.extensions["mailer"] = Mailer.from_config(app.config)
    app.extensions["upload_service"] = UploadService.from_config(app.config)

    # Blueprints
    api_prefix = f"/api/{app.config['API_VERSION']}"
    for blueprint, mount in BLUEPRINTS:
        app.register_blueprint(blueprint, url_prefix=f"{api_prefix}/{mount}")

    _register_core_routes(app, api_prefix)
    _register_error_handlers(app)
    _register_commands(app)

    return app


def _configure_logging(app: Flask) -> None:
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def _register_core_routes(app: Flask, api_prefix: str) -> None:
    @app.route("/health", methods=["GET"])
    def health_check():
        return jsonify(
            {
                "success": True,
                "status": "ok",
                "message": "Server is running",
                "timestamp": datetime.now(UTC).isoformat(),
                "environment": app.config["ENVIRONMENT"],
                "version": API_RELEASE,
            }
        )

    @app.route("/", methods=["GET"])
    def index():
        endpoints = {"health": "/health"}
        endpoints.update({mount: f"{api_prefix}/{mount}" for _, mount in BLUEPRINTS})
        return jsonify(
            {
                "success": True,
                "message": API_TITLE,
                "version": API_RELEASE,
                "endpoints": endpoints,
            }
        )

    @app.route("/uploads/<path:filename>", methods=["GET"])
    def uploaded_file(filename: str):
        return send_from_directory(app.config["UPLOAD_DIR"], filename)


def _register_error_handlers(app: Flask) -> None:
    """Register JSON error handlers with request IDs."""

    @app.before_request
    def _assign_request_id():
        g.request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())

    @app.after_request
    def _add_request_id_header(response):
        request_id = g.get("request_id")
        if request_id:
            response.headers.setdefault("X-Request-ID", request_id)
        app.logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
        return response

    def _error_response(status: int, message: str, **extra):
        request_id = g.get("request_id") or str(uuid.uuid4())
        payload = {"success": False, "message": message, **extra, "requestId": request_id}
        response = jsonify(payload)
        response.status_code = status
        response.headers.setdefault("X-Request-ID", request_id)
        return response

    def _redacted(error) -> str:
        if app.config.get("ENVIRONMENT") == "development":
            return str(error)
        return "Internal server error"

    @app.errorhandler(HTTPException)
    def _handle_http_exception(error: HTTPException):
        # Flask-Limiter raises its own 429 carrying the limit string.
        if isinstance(error, TooManyRequests) and not isinstance(error, RateLimitError):
            error = RateLimitError()

        status = error.code or 500
        extra = {}
        if getattr(error, "errors", None):
            extra["errors"] = error.errors
        if getattr(error, "error_code", None):
            extra["code"] = error.error_code

        if type(error) is NotFound:
            message = f"Route {request.path} not found"
        elif status >= 500:
            app.logger.error("Server error: %s", error.description, exc_info=error.__cause__)
            message = _redacted(error.description)
        else:
            message = error.description
        if status < 500:
            app.logger.info("%s %s -> %s: %s", request.method, request.path, status, message)
        return _error_response(status, message, **extra)

    @app.errorhandler(SQLAlchemyError)
    def _handle_database_error(error: SQLAlchemyError):
        db.session.rollback()
        app.logger.exception("Database error", exc_info=error)
        return _error_response(500, _redacted(error))

    @app.errorhandler(Exception)
    def _handle_unexpected(error: Exception):
        app.logger.exception("Unhandled application error", exc_info=error)
        return _error_response(500, _redacted(error))


def _register_commands(app: Flask) -> None:
    @app.cli.command("init-db")
    def init_db_command():
        """Create all tables and the default administrator."""
        initialize_database(app)
        click.echo("Database initialized.")

    @app.cli.command("seed-admin")
    def seed_admin_command():
        """Create the default administrator if it does not exist."""
        _, created_admin = seed_default_admin(app)
        click.echo("Admin user created." if created_admin else "Admin user already exists.")


def seed_default_admin(app: Flask):
    return app.extensions["auth_service"].ensure_default_admin(
        email=app.config["ADMIN_EMAIL"],
        password=app.config["ADMIN_PASSWORD"],
        name=app.config["ADMIN_NAME"],
    )


def initialize_database(app: Flask) -> None:
    with app.app_context():
        db.create_all()
        logger.info("Database tables created successfully")
        seed_default_admin(app)


def _log_uncaught(exc_type, exc_value, exc_traceback):
    logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))
    sys.exit(1)


if __name__ == "__main__":
    sys.excepthook = _log_uncaught
    application = create_app()
    initialize_database(application)
    application.run(host="0.0.0.0", port=application.config["PORT"])
