"""Chat history kept in the key-value store. Turns are read and written as Pydantic models."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from calmspace.classifier import ResponseClassifier
from calmspace.models import ConversationTurn
from calmspace.store import KeyValueStore

log = logging.getLogger(__name__)

HISTORY_KEY = "chatHistory"
DEFAULT_HISTORY_LIMIT = 50

WELCOME_MESSAGE = (
    "Namaste! I'm here to listen and support you. What's on your mind today? \U0001f499"
)


def _read_turns(store: KeyValueStore) -> list[ConversationTurn]:
    raw = store.get(HISTORY_KEY, [])
    if not isinstance(raw, list):
        log.warning("Chat history in %s is not a list; ignoring it", store.path)
        return []

    turns: list[ConversationTurn] = []
    for entry in raw:
        try:
            turns.append(ConversationTurn.model_validate(entry))
        except ValidationError as exc:
            log.warning("Skipping unreadable chat entry: %s", exc)
    return turns


def _write_turns(store: KeyValueStore, turns: list[ConversationTurn]) -> None:
    store.set(HISTORY_KEY, [t.model_dump(mode="json") for t in turns])


def _check_limit(limit: int) -> None:
    if limit < 1:
        raise ValueError(f"history limit must be at least 1, got {limit}")


def load_history(
    store: KeyValueStore, limit: int = DEFAULT_HISTORY_LIMIT
) -> list[ConversationTurn]:
    """Return the most recent ``limit`` turns, oldest first."""
    _check_limit(limit)
    return _read_turns(store)[-limit:]


def add_turn(
    store: KeyValueStore,
    text: str,
    is_from_user: bool,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> ConversationTurn:
    """Append a turn and keep only the last ``limit`` on disk."""
    _check_limit(limit)
    turn = ConversationTurn(text=text, is_from_user=is_from_user)
    turns = _read_turns(store)
    turns.append(turn)
    _write_turns(store, turns[-limit:])
    return turn


def reply(
    store: KeyValueStore,
    text: str,
    classifier: ResponseClassifier,
    limit: int = DEFAULT_HISTORY_LIMIT,
) -> tuple[ConversationTurn, ConversationTurn]:
    """Record the user's message and the companion's answer to it."""
    user_turn = add_turn(store, text, is_from_user=True, limit=limit)
    result = classifier.classify(text)
    companion_turn = add_turn(store, result.response, is_from_user=False, limit=limit)
    return user_turn, companion_turn


def clear_history(store: KeyValueStore) -> bool:
    """Forget every stored turn. Returns False if there was nothing to clear."""
    return store.remove(HISTORY_KEY)
