from flask import Flask
from quizroom.config import config_map
from quizroom import extensions
import logging
import os


def create_app(env: str = None, overrides: dict = None) -> Flask:
    app = Flask(__name__)

    env = env or os.getenv("FLASK_ENV", "development")
    app.config.from_object(config_map.get(env, config_map["default"]))
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Init extensions.  Referenced through the module: importing the
    # quizroom.db subpackage below rebinds the name ``db`` on this package.
    extensions.db.init_app(app)
    extensions.migrate.init_app(app, extensions.db)
    extensions.jwt.init_app(app)

    with app.app_context():
        # Import models so Flask-Migrate can detect them
        from quizroom.db.models import User  # noqa: F401

        from quizroom.api.common import STORE_KEY, register_error_handlers
        from quizroom.services.store import QuizStore

        # One store per application; services receive it from the API layer
        app.extensions[STORE_KEY] = QuizStore(extensions.db.session)
        register_error_handlers(app)

        # Register blueprints
        from quizroom.api.assignments import assignments_bp
        from quizroom.api.auth import auth_bp
        from quizroom.api.media import media_bp
        from quizroom.api.quizzes import quizzes_bp
        from quizroom.api.results import results_bp
        from quizroom.api.sessions import sessions_bp
        from quizroom.api.students import students_bp
        from quizroom.api.teams import teams_bp

        app.register_blueprint(auth_bp)
        app.register_blueprint(quizzes_bp)
        app.register_blueprint(assignments_bp)
        app.register_blueprint(sessions_bp)
        app.register_blueprint(teams_bp)
        app.register_blueprint(students_bp)
        app.register_blueprint(results_bp)
        app.register_blueprint(media_bp)

    return app
