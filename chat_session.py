"""
chat_session.py
---------------
Conversation state for the chat shell.

Keeps the list of turns, the reply currently being revealed, and the
stop-before-submit rule: sending a message while a reply is still being
revealed only stops that reveal, it never starts a second one.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from assistant import DataAssistant, Reply
from reveal import DEFAULT_INTERVAL, RevealTask

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 5


@dataclass
class ConversationTurn:
    question: str
    reply: Reply
    reveal: RevealTask
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def displayed(self) -> str:
        """The part of the reply the user has seen so far."""
        return self.reveal.revealed

    @property
    def stopped(self) -> bool:
        return self.reveal.cancelled


class ChatSession:
    """
    Parameters
    ----------
    assistant:
        The DataAssistant that answers each message.
    interval:
        Seconds per revealed character.
    """

    def __init__(self, assistant: DataAssistant, interval: float = DEFAULT_INTERVAL):
        self.assistant = assistant
        self.interval = interval
        self.turns: list[ConversationTurn] = []
        self._active: Optional[ConversationTurn] = None

    @property
    def active(self) -> Optional[ConversationTurn]:
        return self._active

    @property
    def is_revealing(self) -> bool:
        return self._active is not None and not self._active.reveal.done

    def submit(self, text: str) -> Optional[ConversationTurn]:
        """
        Ask a question.

        Returns the new turn, or None when nothing was asked: blank text is
        ignored, and a submit during a reveal is treated as stop().
        """
        if not text or not text.strip():
            return None
        if self.is_revealing:
            self.stop()
            return None

        turn = self._ask(text)
        self.turns.append(turn)
        return turn

    def edit(self, turn_id: str, text: str) -> Optional[ConversationTurn]:
        """
        Replace the question of an earlier turn and answer it again in place.

        Raises
        ------
        ValueError
            If no turn has the given id.
        """
        index = next((i for i, t in enumerate(self.turns) if t.id == turn_id), None)
        if index is None:
            raise ValueError(f"No conversation turn with id {turn_id!r}")
        if not text or not text.strip():
            return None
        if self.is_revealing:
            self.stop()
            return None

        turn = self._ask(text, turn_id=turn_id)
        self.turns[index] = turn
        return turn

    def tick(self) -> bool:
        """Advance the active reveal by one character. True while more remain."""
        if self._active is None:
            return False
        return self._active.reveal.tick()

    def stop(self) -> bool:
        """Stop the active reveal, keeping what was shown. True if one was stopped."""
        if not self.is_revealing:
            return False
        stopped = self._active.reveal.cancel()
        logger.debug("Stopped reveal of turn %s at %d char(s)", self._active.id, self._active.reveal.cursor)
        return stopped

    def new_chat(self) -> None:
        self.stop()
        self.turns.clear()
        self._active = None

    def history(self, limit: int = HISTORY_LIMIT) -> list[ConversationTurn]:
        """The last `limit` turns, oldest first, for the history list."""
        if limit <= 0:
            return []
        return self.turns[-limit:]

    def _ask(self, text: str, turn_id: Optional[str] = None) -> ConversationTurn:
        reply = self.assistant.answer(text)
        turn = ConversationTurn(
            question=text,
            reply=reply,
            reveal=RevealTask(reply.text, self.interval),
        )
        if turn_id is not None:
            turn.id = turn_id
        self._active = turn
        logger.info("Answered %r as %s with %d source(s)", text, reply.intent.value, len(reply.sources))
        return turn
