"""Seed resolution API routes.

Turns whatever a client sends as a seed (int, numeric string, free text or
nothing) into the bounded integer seed the generator expects. The graph
endpoints resolve their ``seed`` query argument the same way, so a phrase
like ``?seed=crypt of keys`` names the same dungeon everywhere.
"""
import hashlib
import random

from flask import Blueprint, jsonify, request

bp_seed = Blueprint('seed_api', __name__)

MAX_SEED = 2**31 - 1


def _random_seed():
    return random.randint(1, 1_000_000)


def _text_seed(text: str) -> int:
    digest = hashlib.sha256(text.encode('utf-8')).digest()
    return int.from_bytes(digest[:8], 'big') % MAX_SEED


def coerce_seed(value):
    """Resolve ``value`` to an int in ``[0, MAX_SEED)``; blank or missing means random."""
    if isinstance(value, bool) or value is None:
        return _random_seed()
    if isinstance(value, int):
        return value % MAX_SEED
    text = str(value).strip()
    if not text:
        return _random_seed()
    if text.lstrip('-').isdigit():
        return int(text) % MAX_SEED
    return _text_seed(text)


@bp_seed.route('/api/dungeon/seed', methods=['POST'])
def resolve_seed():
    """Resolve a seed for later graph requests.

    Body JSON (all optional):
      { "seed": <int|str|null> }
    - If seed omitted or null => random seed.
    - Strings that are not plain integers are hashed deterministically.

    Response: { "seed": <int> }
    """
    data = request.get_json(silent=True) or {}
    return jsonify({"seed": coerce_seed(data.get('seed'))})
