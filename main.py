"""
main.py
-------
Console chat for the BPS Kota Medan data assistant.

Run:
    python main.py

Commands:
    /baru            start a new chat
    /riwayat         show the last questions
    /edit N teks     ask question number N again with new text
    /keluar          quit

Press Ctrl-C while a reply is being typed to stop it.
"""

import logging
import sys

import config
from assistant import DataAssistant
from chat_session import ChatSession
from suggestions import SuggestionProvider

logger = logging.getLogger(__name__)

BANNER = """\
Selamat datang di BPS AI Assistant
Saya siap membantu Anda menemukan data statistik resmi dari BPS Kota Medan.
"""
FOOTER = "AI Assistant dapat membuat kesalahan. Verifikasi informasi penting dengan sumber resmi."


def print_welcome(suggestions: SuggestionProvider) -> None:
    print(BANNER)
    print("Coba tanyakan:")
    for suggestion in suggestions.suggest(""):
        print(f"  - {suggestion}")
    print(f"\n{FOOTER}\n")


def print_history(session: ChatSession) -> None:
    if not session.turns:
        print("Belum ada riwayat chat")
        return
    offset = len(session.turns) - len(session.history())
    for number, turn in enumerate(session.history(), start=offset + 1):
        print(f"  {number}. {turn.question}  ({turn.timestamp:%d/%m/%Y})")


def show_turn(session: ChatSession) -> None:
    """Type out the active reply; Ctrl-C stops it."""
    turn = session.active
    if turn is None:
        return
    print("Asisten: ", end="", flush=True)
    try:
        turn.reveal.run(on_tick=lambda ch: print(ch, end="", flush=True))
    except KeyboardInterrupt:
        session.stop()
    if turn.stopped:
        print(turn.displayed[turn.reveal.cursor:], end="")
    print()

    if turn.reply.sources:
        print("\nSumber Data:")
        for source in turn.reply.sources:
            print(f"  🔗 {source.title} <{source.url}>")
    print()


EDIT_USAGE = "Format: /edit N teks  (N = nomor pertanyaan di /riwayat)"


def handle_edit(session: ChatSession, args: str) -> None:
    number, _, text = args.strip().partition(" ")
    if not text.strip():
        print(EDIT_USAGE)
        return
    try:
        turn = session.turns[int(number) - 1]
    except (ValueError, IndexError):
        print(EDIT_USAGE)
        return
    if session.edit(turn.id, text) is not None:
        show_turn(session)


def handle_line(session: ChatSession, suggestions: SuggestionProvider, text: str) -> bool:
    """Run one line of input. Returns False when the user wants to quit."""
    command, _, args = text.partition(" ")
    if command == "/keluar":
        return False
    if command == "/baru":
        session.new_chat()
        print_welcome(suggestions)
    elif command == "/riwayat":
        print_history(session)
    elif command == "/edit":
        handle_edit(session, args)
    elif session.submit(text) is not None:
        show_turn(session)
    return True


def main() -> int:
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    assistant = DataAssistant.from_config(config.BPS_CONFIG_PATH)
    suggestions = SuggestionProvider.from_config(config.BPS_CONFIG_PATH)
    session = ChatSession(assistant, interval=config.REVEAL_INTERVAL_MS / 1000)

    print_welcome(suggestions)
    while True:
        try:
            text = input("Anda: ").strip()
        except (EOFError, KeyboardInterrupt):
            print()
            break

        if not handle_line(session, suggestions, text):
            break

    logger.debug("Chat closed after %d turn(s)", len(session.turns))
    return 0


if __name__ == "__main__":
    sys.exit(main())
