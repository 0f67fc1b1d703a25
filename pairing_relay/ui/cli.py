from prompt_toolkit import PromptSession
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.panel import Panel
from rich.theme import Theme

from pairing_relay.core.session_manager import SessionManager
from pairing_relay.utils.config import DEFAULT_RELAY_URL

custom_theme = Theme({
    "info": "dim cyan",
    "warning": "magenta",
    "danger": "bold red",
    "chat_peer": "green",
    "chat_self": "cyan",
})

console = Console(theme=custom_theme)

HELP_TEXT = "[dim]/next  talk to someone else\n/quit  leave\n/help  this list[/dim]"

# event -> (style, text); "{}" is filled with the event data
EVENT_LINES = {
    "CONNECTING": ("info", "Connecting to {}..."),
    "WELCOME": ("info", "Connected as {}"),
    "SEARCHING": ("info", "Looking for a stranger to talk to..."),
    "CHAT_ENDED": ("warning", "Stranger ended the chat."),
    "PARTNER_LEFT": ("warning", "Stranger disconnected."),
    "ERROR": ("danger", "Error: {}"),
}

# events after which there is nothing left to type into
FINAL_EVENTS = {
    "DISCONNECTED": "Lost connection to the relay.",
    "DESTROYED": "Session closed. Exiting...",
}


class RelayChatCLI:
    def __init__(self, uri=DEFAULT_RELAY_URL, session_manager=None):
        self.session_manager = session_manager or SessionManager(self.ui_callback, uri=uri)
        self.prompt = None
        self.running = True

    def ui_callback(self, event_type, data=None):
        if event_type == "PAIRED":
            console.print(Panel("[bold green]You're now chatting with a stranger[/bold green]\n" + HELP_TEXT, expand=False))
        elif event_type == "MESSAGE":
            console.print(f"[chat_peer]Stranger:[/chat_peer] {data}")
        elif event_type in FINAL_EVENTS:
            console.print(f"[danger]{FINAL_EVENTS[event_type]}[/danger]")
            self.running = False
        elif event_type in EVENT_LINES:
            style, text = EVENT_LINES[event_type]
            console.print(f"[{style}]{text.format(data)}[/{style}]")

    async def handle_line(self, line: str):
        """Act on one line of input. Sets `running` to False on /quit."""
        text = line.strip()
        if not text:
            return
        command = text.lower()
        if command == "/quit":
            await self.session_manager.destroy_session()
            self.running = False
        elif command == "/next":
            await self.session_manager.next_partner()
        elif command == "/help":
            console.print(HELP_TEXT)
        elif await self.session_manager.send_message(text):
            console.print(f"[chat_self]You:[/chat_self] {text}")

    async def run(self):
        console.clear()
        console.print(Panel.fit("[bold white]RELAY CHAT[/bold white]\n[dim]Talk to a random stranger.[/dim]", style="blue"))

        try:
            await self.session_manager.start_session()
        except Exception as e:
            console.print(f"[danger]Failed to start: {e}[/danger]")
            return

        self.prompt = PromptSession()
        with patch_stdout():
            while self.running:
                try:
                    line = await self.prompt.prompt_async("You: ")
                except (EOFError, KeyboardInterrupt):
                    await self.session_manager.destroy_session()
                    break
                await self.handle_line(line)
