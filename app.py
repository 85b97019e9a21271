# app.py
import os
import logging
from datetime import datetime

from flask import Flask

import store
from auth import configure_secret
from notes import notes

BASE_DIR = os.path.dirname(os.path.abspath(__file__))

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


def fmt_ts(ts):
    try:
        return datetime.fromtimestamp(int(ts)).strftime("%Y-%m-%d %H:%M")
    except (TypeError, ValueError, OverflowError, OSError):
        return ""


def create_app(config=None):
    """Build the app from the environment, with ``config`` taking precedence.

    Refuses to start without APP_PASSWORD.
    """
    settings = dict(os.environ)
    settings.update(config or {})

    app = Flask(__name__, template_folder="templates")
    app.secret_key = settings.get("FLASK_SECRET", "change_this_in_production_please")

    data_dir = settings.get("NOTES_DATA_DIR") or os.path.join(BASE_DIR, "data")
    app.config.update(
        APP_PASSWORD=configure_secret(settings.get("APP_PASSWORD")),
        APP_TITLE=settings.get("APP_TITLE", "Tiny Notes"),
        NOTES_FILE=os.path.join(data_dir, settings.get("NOTES_FILE", "notes.json")),
    )
    if settings.get("TESTING"):
        app.config["TESTING"] = True

    app.jinja_env.filters['fmt_ts'] = fmt_ts

    @app.context_processor
    def inject_title():
        return {"app_title": app.config["APP_TITLE"]}

    app.register_blueprint(notes)

    store.ensure_data_file(app.config["NOTES_FILE"])
    app.logger.info("Serving notes from %s", app.config["NOTES_FILE"])
    return app


if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
    create_app().run(debug=True)
