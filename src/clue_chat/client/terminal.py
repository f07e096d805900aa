# src/clue_chat/client/terminal.py
import asyncio
import logging
import sys

import httpx

from clue_chat.client.consumer import StreamConsumer
from clue_chat.client.conversation import ConversationStateManager
from clue_chat.client.errors import SubmissionRejected
from clue_chat.client.state import Tab
from clue_chat.config import settings
from clue_chat.memory.file_store import JsonFileKeyValueStore
from clue_chat.schemas.chat import Message, Role

logger = logging.getLogger(__name__)

HELP = """Commands:
  /new          start a new conversation
  /history      list past sessions
  /open N       load session N into the conversation
  /bookmark     bookmark (or un-bookmark) the last reply
  /bookmarks    list bookmarked replies
  /quit         exit"""


class TypingPrinter:
    """Prints only the newly arrived part of a growing message."""

    def __init__(self):
        self.printed = ""

    def __call__(self, message: Message):
        if message.role != Role.ASSISTANT:
            return
        if message.text.startswith(self.printed):
            sys.stdout.write(message.text[len(self.printed):])
        else:
            # Replaced rather than extended (error text)
            sys.stdout.write("\n" + message.text)
        sys.stdout.flush()
        self.printed = message.text

    def reset(self):
        self.printed = ""


def _last_reply(manager: ConversationStateManager):
    for message in reversed(manager.state.messages):
        if message.role == Role.ASSISTANT and not message.streaming:
            return message
    return None


def _handle_command(line: str, manager: ConversationStateManager) -> bool:
    """Runs a slash command. Returns False when the user asked to quit."""
    command, _, arg = line.partition(" ")
    state = manager.state

    if command in ("/quit", "/exit"):
        return False
    if command == "/new":
        manager.start_new_conversation()
        print("Started a new conversation.")
    elif command == "/history":
        manager.set_active_tab(Tab.HISTORY)
        if not state.sessions:
            print("No history yet.")
        for index, session in enumerate(state.sessions, start=1):
            print(f"{index:>3}. {session.created_at:%Y/%m/%d %H:%M}  {session.title}")
    elif command == "/open":
        try:
            session = state.sessions[int(arg) - 1]
        except (ValueError, IndexError):
            print(f"No session '{arg}'. Use /history to list sessions.")
            return True
        manager.load_conversation_from_session(session)
        for message in state.messages:
            speaker = "You" if message.role == Role.USER else "AI"
            print(f"{speaker}: {message.text}\n")
    elif command == "/bookmark":
        reply = _last_reply(manager)
        if reply is None:
            print("Nothing to bookmark yet.")
        else:
            added = manager.toggle_bookmark(reply)
            print("Bookmarked." if added else "Bookmark removed.")
    elif command == "/bookmarks":
        manager.set_active_tab(Tab.BOOKMARKS)
        if not state.bookmarks:
            print("No bookmarks yet.")
        for message in state.bookmarks:
            print(f"[{message.created_at:%H:%M}] {message.text}\n")
    else:
        print(HELP)
    return True


async def chat_loop(manager: ConversationStateManager, client: httpx.AsyncClient):
    printer = TypingPrinter()
    consumer = StreamConsumer(manager, client, on_update=printer)
    print(f"Connected to {settings.server_url}. Type /help for commands.")

    while True:
        try:
            line = (await asyncio.to_thread(input, "You: ")).strip()
        except (EOFError, KeyboardInterrupt):
            break
        if not line:
            continue
        if line.startswith("/"):
            try:
                if not _handle_command(line, manager):
                    break
            except OSError as e:
                print(f"Could not save to {settings.storage_path}: {e}")
            continue

        manager.set_active_tab(Tab.CHAT)
        manager.state.draft = line
        printer.reset()
        sys.stdout.write("AI: ")
        try:
            await consumer.submit()
        except SubmissionRejected as e:
            print(e)
        except OSError as e:
            print(f"\nCould not save history to {settings.storage_path}: {e}")
        print("\n")


async def run_terminal():
    store = JsonFileKeyValueStore(settings.storage_path)
    manager = ConversationStateManager(store)
    manager.load()
    async with httpx.AsyncClient(base_url=settings.server_url, timeout=settings.request_timeout) as client:
        await chat_loop(manager, client)


def main():
    """Entry point for the `clue-chat` script."""
    logging.basicConfig(
        level=logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )
    try:
        asyncio.run(run_terminal())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
