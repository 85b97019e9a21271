# notes.py
from flask import Blueprint, render_template, request, redirect, url_for, current_app, abort

import store
from auth import WRONG_PASSWORD, handle_login, handle_logout, login_required, render_login

notes = Blueprint('notes', __name__, template_folder="templates")

MUTATING_ACTIONS = ('login', 'add', 'delete')


def notes_path():
    return current_app.config['NOTES_FILE']


def require_post():
    if request.method != 'POST':
        abort(405)


def save_or_fail(data):
    try:
        store.save_notes(notes_path(), data)
    except (OSError, TypeError, ValueError):
        current_app.logger.exception("Failed to save notes to %s", notes_path())
        abort(500)


@notes.route('/', methods=['GET', 'POST'])
def index():
    action = request.form.get('action') or request.args.get('action', '')

    if action == 'logout':
        handle_logout()
        return redirect(url_for('notes.index'))

    if action in MUTATING_ACTIONS:
        require_post()

    if action == 'login':
        if handle_login(request.form):
            return redirect(url_for('notes.index'))
        return render_login(WRONG_PASSWORD)

    return wall(action)


@login_required
def wall(action):
    store.ensure_data_file(notes_path())
    data = store.load_notes(notes_path())

    if action == 'add':
        note = store.add_note(data, request.form.get('text', ''))
        if note:
            save_or_fail(data)
            current_app.logger.info("Added note %s", note['id'])
        return redirect(url_for('notes.index'))

    if action == 'delete':
        note_id = request.form.get('id', '')
        if note_id:
            removed = store.delete_note(data, note_id)
            save_or_fail(data)
            current_app.logger.info("Deleted note %s (%d removed)", note_id, removed)
        return redirect(url_for('notes.index'))

    q = request.args.get('q', '').strip()
    return render_template('home.html', notes=store.search_notes(data['notes'], q), q=q)
