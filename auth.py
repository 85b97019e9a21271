# auth.py
"""Shared-password gate.

There are no accounts: one secret, configured at startup, unlocks the wall.
The only thing kept in the session is the ``authed`` flag.
"""
import hmac
from functools import wraps

from flask import current_app, render_template, session

AUTHED_KEY = 'authed'
WRONG_PASSWORD = "Wrong password."


def configure_secret(value):
    if not value:
        raise RuntimeError("APP_PASSWORD is not set.")
    return value


def is_authenticated(sess):
    return sess.get(AUTHED_KEY) is True


def login(sess, submitted, secret):
    """Check ``submitted`` against ``secret`` and record the outcome in ``sess``.

    A failed attempt stores an explicit False rather than leaving the flag
    unset.
    """
    ok = hmac.compare_digest(
        (submitted or '').encode('utf-8'),
        secret.encode('utf-8'),
    )
    sess[AUTHED_KEY] = ok
    return ok


def logout(sess):
    sess.clear()


def render_login(error=None):
    return render_template('login.html', login_error=error)


def login_required(f):
    @wraps(f)
    def wrapped(*args, **kwargs):
        if not is_authenticated(session):
            return render_login()
        return f(*args, **kwargs)
    return wrapped


def handle_login(form):
    if login(session, form.get('password', ''), current_app.config['APP_PASSWORD']):
        current_app.logger.info("Login succeeded")
        return True
    current_app.logger.warning("Login failed")
    return False


def handle_logout():
    logout(session)
    current_app.logger.info("Logged out")
