import os
import logging
from datetime import datetime

# --- Flask specific imports ---
from flask import Flask
from flask_cors import CORS

# --- Import our configuration and the library components ---
from config import Config, missing_settings
from songlib.clients import SongDetailClient
from songlib.database.db_manager import db, initialize_database
from songlib.interfaces.http.routes import library_bp, health_bp
from songlib.observability import (
    configure_structured_logging,
    init_request_ids,
    init_tracing,
    metrics_blueprint,
)


logger = logging.getLogger(__name__)


def configure_logging(log_dir: str) -> str:
    """
    Configure root logging with:
      - FileHandler (INFO+) to a new file per run: log-YYYY-MM-DD-HH-MM-SS
      - StreamHandler (WARNING+) to console when ENABLE_CONSOLE_LOGS is on
      - Werkzeug/Flask loggers routed to root

    Returns the path to the created log file.
    """
    os.makedirs(log_dir, exist_ok=True)

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_path = os.path.join(log_dir, f"log-{timestamp}")

    root = logging.getLogger()
    root.setLevel(logging.INFO)

    # Preserve structured handlers; remove existing FileHandlers to avoid duplicates
    root.handlers = [h for h in root.handlers if not isinstance(h, logging.FileHandler)]

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    file_handler = logging.FileHandler(log_path, encoding='utf-8')
    file_handler.setLevel(logging.INFO)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)

    if Config.ENABLE_CONSOLE_LOGS:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.WARNING)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    for name in ("werkzeug", "flask.app"):
        _l = logging.getLogger(name)
        _l.setLevel(logging.INFO)
        _l.handlers = []
        _l.propagate = True

    return log_path


def create_app(test_config=None, song_detail_client=None):
    """Build the Flask application.

    :param test_config: Mapping applied on top of :class:`Config`.
    :param song_detail_client: Client for the song detail service; built
        from ``EXTERNAL_API_URL`` when omitted.
    """
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    configure_structured_logging(app)
    init_request_ids(app)

    allowed_origins = sorted({
        origin.strip()
        for origin in app.config.get('CORS_ALLOWED_ORIGINS') or []
        if origin and origin.strip() and origin.strip() != "*"
    })
    if allowed_origins:
        CORS(app, resources={r"/library/*": {"origins": allowed_origins}})

    # Initialize database
    initialize_database(app)

    # The detail client is injected here rather than held in module state
    if song_detail_client is None:
        song_detail_client = SongDetailClient(
            base_url=app.config['EXTERNAL_API_URL'],
            timeout=app.config['EXTERNAL_API_TIMEOUT_SECONDS'],
        )
    app.extensions['song_detail_client'] = song_detail_client

    with app.app_context():
        init_tracing(app, engine=db.engine)

    # --- Register Blueprints ---
    app.register_blueprint(library_bp)
    app.register_blueprint(health_bp)
    app.register_blueprint(metrics_blueprint)

    return app


if __name__ == '__main__':
    debug_mode = bool(Config.DEBUG)
    log_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'instance', 'log')
    # In debug with reloader, only the child process writes a log file
    if not debug_mode or os.environ.get('WERKZEUG_RUN_MAIN') == 'true':
        log_file_path = configure_logging(log_dir)
        logger.info("File logging initialized at %s", log_file_path)

    for name in missing_settings():
        logger.warning("%s environment variable not set; using the local default", name)

    app = create_app()
    app.logger.handlers = []
    app.logger.setLevel(logging.INFO)
    app.logger.propagate = True
    logger.info("Starting song library at %s:%s", Config.SERVER_HOST, Config.SERVER_PORT)
    app.run(debug=Config.DEBUG, host=Config.SERVER_HOST, port=Config.SERVER_PORT, threaded=True)
