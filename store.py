# store.py
"""JSON file storage for the notes wall.

The whole collection lives in one document, ``{"notes": [...]}``, newest
note first. ``load_notes`` and ``save_notes`` are the only functions that
touch disk; everything else works on the in-memory dict.

Load/mutate/save is not a transaction: two requests mutating at the same
time each save their own copy and the last save wins.
"""
import os
import json
import time
import fcntl
import logging
import secrets
import tempfile

logger = logging.getLogger(__name__)


def empty_collection():
    return {"notes": []}


def ensure_data_file(path):
    dir_path = os.path.dirname(path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)
    if not os.path.exists(path):
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(empty_collection(), f, indent=2)


def load_notes(path):
    """Read the collection from ``path``.

    An empty, unparseable or wrongly shaped file reads as an empty
    collection instead of raising, so a corrupt store shows up as an empty
    wall. The raw file is left untouched until the next save.
    """
    try:
        with open(path, 'rb') as f:
            raw = f.read()
    except FileNotFoundError:
        return empty_collection()
    try:
        data = json.loads(raw.decode('utf-8'))
    except ValueError:
        # UnicodeDecodeError is a ValueError too
        logger.warning("Notes file %s is not valid JSON, treating as empty", path)
        return empty_collection()
    if not isinstance(data, dict) or not isinstance(data.get('notes'), list):
        logger.warning("Notes file %s has no notes list, treating as empty", path)
        return empty_collection()
    return data


def save_notes(path, data):
    """Replace the file at ``path`` with ``data``.

    Writers serialize on an exclusive flock of ``<path>.lock``. The new
    document is written to a temp file, fsynced and renamed over the old one
    before the lock is released, so readers see either the old or the new
    document and never a partial one.
    """
    text = json.dumps(data, indent=2, ensure_ascii=False)
    dir_path = os.path.dirname(path) or '.'

    lock_file = open(path + ".lock", 'a+', encoding='utf-8')
    try:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_EX)
        fd, tmp_path = tempfile.mkstemp(
            prefix="." + os.path.basename(path) + ".", suffix=".tmp", dir=dir_path
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(text)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
    finally:
        fcntl.flock(lock_file.fileno(), fcntl.LOCK_UN)
        lock_file.close()


def new_note_id():
    return secrets.token_hex(8)


def add_note(data, text, now=None):
    """Prepend a note with ``text`` to ``data``.

    Returns the new note, or None when ``text`` is blank.
    """
    text = (text or '').strip()
    if not text:
        return None
    note = {
        "id": new_note_id(),
        "ts": int(time.time() if now is None else now),
        "text": text,
    }
    data['notes'].insert(0, note)
    return note


def delete_note(data, note_id):
    """Drop every note with ``note_id``; returns how many were removed."""
    before = len(data['notes'])
    data['notes'] = [n for n in data['notes'] if not (isinstance(n, dict) and n.get('id') == note_id)]
    return before - len(data['notes'])


def search_notes(notes, query):
    query = (query or '').strip()
    if not query:
        return list(notes)
    needle = query.lower()
    return [n for n in notes if isinstance(n, dict) and needle in str(n.get('text', '')).lower()]
