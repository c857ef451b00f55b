import logging
import os

from dotenv import load_dotenv
from flask import Flask, redirect, render_template, url_for
from flask_login import LoginManager

# Get logger for this module
logger = logging.getLogger(__name__)

# Load environment variables conditionally
# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()


def create_app():
    """Build the Flask application.

    Order matters: logging first so every later step is visible, then
    security plumbing, tables, login manager and finally the blueprints.
    """
    from fincontrol.core.config import (
        CUSTOMER_PLACEHOLDER_IMAGE_URL,
        HEALTH_CHECK_TOKEN,
        get_secret_key,
        is_test_mode,
        log_timezone_config,
    )
    from fincontrol.core.logging_config import setup_logging

    # Determine environment
    env = os.getenv("FLASK_ENV", "development")
    is_production = env == "production"

    app = Flask(__name__)

    # Set TESTING config from environment variable (before any other configuration)
    if os.getenv("TESTING", "").lower().strip() in ("true", "1", "yes"):
        app.config["TESTING"] = True

    setup_logging(
        app=app,
        log_level=logging.INFO if is_production else logging.DEBUG,
        enable_sql_echo=not is_production,
        log_to_file=os.getenv("LOG_TO_FILE", "1") == "1",
        use_json_format=is_production,
    )
    logger.info(
        "Logging configured",
        extra={"context": {"environment": env, "json_format": is_production}},
    )

    log_timezone_config()
    logger.info(
        "Customer placeholder image configured",
        extra={"context": {"image_url": CUSTOMER_PLACEHOLDER_IMAGE_URL}},
    )

    # Initialize Sentry for error tracking when a DSN is configured
    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=env,
            release=os.getenv("GIT_SHA", "unknown"),
            integrations=[
                FlaskIntegration(),
                SqlalchemyIntegration(),
            ],
            traces_sample_rate=0.1,
            send_default_pii=False,  # Don't send PII by default
        )
        logger.info(
            "Sentry initialized",
            extra={"context": {"environment": env, "traces_sample_rate": 0.1}},
        )
    else:
        logger.info(
            "Sentry not initialized (SENTRY_DSN not set)",
            extra={"context": {"environment": env}},
        )

    # Configuration (fails fast on weak secrets in production)
    app.config["SECRET_KEY"] = get_secret_key()
    app.config["HEALTH_CHECK_TOKEN"] = HEALTH_CHECK_TOKEN

    # Rate limiting
    from fincontrol.core.limiter_config import limiter

    app.config["RATELIMIT_STORAGE_URI"] = os.getenv("LIMITER_STORAGE_URI", "memory://")
    limiter.init_app(app)

    if (is_test_mode() or app.config.get("TESTING")) and os.getenv(
        "RATE_LIMIT_ENABLED", "1"
    ) == "0":
        limiter.enabled = False
        logger.info(
            "Rate limiting disabled for testing", extra={"context": {"test_mode": True}}
        )

    # Cookie and Session Hardening
    app.config.setdefault("SESSION_COOKIE_SECURE", is_production)
    app.config.setdefault("SESSION_COOKIE_HTTPONLY", True)
    app.config.setdefault("SESSION_COOKIE_SAMESITE", "Lax")
    app.config.setdefault("REMEMBER_COOKIE_SECURE", is_production)
    app.config.setdefault("REMEMBER_COOKIE_HTTPONLY", True)

    # CSRF Protection for every form
    from fincontrol.core.csrf_config import csrf

    app.config["WTF_CSRF_TIME_LIMIT"] = None  # Tokens don't expire
    app.config["WTF_CSRF_SSL_STRICT"] = is_production
    csrf.init_app(app)

    # Ensure database tables exist early; idempotent on SQLite and PostgreSQL
    from fincontrol.db.session import create_tables, get_engine

    create_tables()
    logger.info(
        "Database ready",
        extra={"context": {"driver": get_engine().dialect.name}},
    )

    # Login manager
    from fincontrol.db.base import User

    login_manager = LoginManager()
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"  # type: ignore[assignment]
    login_manager.login_message = "Please log in to access this page."

    @login_manager.user_loader
    def load_user(user_id):
        from fincontrol.db.session import SessionLocal

        with SessionLocal() as db:
            return db.get(User, user_id)

    # Template helpers
    from fincontrol.utils.template_helpers import register_template_helpers

    register_template_helpers(app)

    # Blueprints
    from fincontrol.controllers.auth_controller import auth_bp
    from fincontrol.controllers.customer_controller import customers_bp
    from fincontrol.controllers.health_controller import health_bp
    from fincontrol.controllers.invoice_controller import invoices_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(invoices_bp)
    app.register_blueprint(customers_bp)
    app.register_blueprint(health_bp)

    @app.route("/")
    def index():
        return redirect(url_for("invoices.list_invoices"))

    @app.route("/dashboard")
    def dashboard():
        return redirect(url_for("invoices.list_invoices"))

    @app.errorhandler(404)
    def not_found(error):
        return render_template("404.html"), 404

    logger.info(
        "Application created",
        extra={"context": {"blueprints": sorted(app.blueprints.keys())}},
    )
    return app
