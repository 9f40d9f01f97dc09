"""Remote CLI Client for the SAM API

Talks to a running SAM server over HTTP instead of hosting the agent
system in-process.

Usage:
    python -m cli --server http://192.168.1.100:8000
    python -m cli --server http://localhost:8000 "What is SAM?"
"""

from typing import Any, Dict, Optional

import httpx
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from rich.table import Table


class RemoteClient:
    """Client for a remote SAM server"""

    def __init__(
        self,
        server_url: str,
        session_id: str = "cli",
        console: Optional[Console] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        """Initialize remote client

        Args:
            server_url: Full URL of server (e.g., http://192.168.1.100:8000)
            session_id: Conversation session used for every message
            console: Console to print to
            client: HTTP client (one with a 120s timeout is created if omitted)
        """
        self.server_url = server_url.rstrip('/')
        self.session_id = session_id
        self.console = console or Console()
        self.client = client or httpx.AsyncClient(timeout=120.0)

    def _url(self, path: str) -> str:
        return f"{self.server_url}/api{path}"

    async def health_check(self) -> bool:
        """Check that the server is reachable and show per-agent health"""
        try:
            response = await self.client.get(self._url("/health"))
        except httpx.ConnectError:
            self.console.print(f"[red]✗[/red] Cannot connect to server at {self.server_url}")
            self.console.print("[dim]Make sure the server is running and accessible[/dim]")
            return False

        if response.status_code != 200:
            self.console.print(f"[red]✗[/red] Server returned status {response.status_code}")
            return False

        data = response.json()
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Agent")
        table.add_column("Healthy")
        for agent, healthy in data.get("agents", {}).items():
            table.add_row(agent, "[green]✓[/green]" if healthy else "[red]✗[/red]")
        self.console.print(table)
        self.console.print(f"Server status: [cyan]{data.get('status', 'unknown')}[/cyan]")
        return True

    async def send(self, message: str) -> Optional[Dict[str, Any]]:
        """Send a chat message and display the rendered response

        Returns:
            Parsed ChatResponse payload, or None if the request failed
        """
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True
        ) as progress:
            progress.add_task("[cyan]SAM is thinking...", total=None)
            try:
                response = await self.client.post(
                    self._url("/chat"),
                    json={"message": message, "session_id": self.session_id},
                )
            except httpx.HTTPError as e:
                self.console.print(f"[red]✗[/red] Request failed: {e}")
                return None

        if response.status_code != 200:
            self.console.print(f"[red]✗[/red] Request failed: {response.text}")
            return None

        data = response.json()
        self.console.print("\n[bold magenta]SAM:[/bold magenta]")
        self.console.print(Markdown(data["rendered"]))
        return data

    async def set_mode(self, mode: str) -> bool:
        response = await self.client.post(self._url("/mode"), json={"mode": mode})
        if response.status_code != 200:
            self.console.print(f"[red]Unknown mode: {mode}[/red] (use outbound or inbound)")
            return False

        data = response.json()
        team = ", ".join(data["active_team"]) or "none registered"
        self.console.print(f"[green]✓[/green] Mode: {data['mode']} (team: {team})")
        return True

    async def clear_session(self) -> bool:
        response = await self.client.delete(self._url(f"/sessions/{self.session_id}"))
        if response.status_code == 404:
            self.console.print("[yellow]No conversation history yet[/yellow]")
            return False
        self.console.print(f"[green]✓[/green] Session {self.session_id} cleared")
        return True

    async def run_interactive(self):
        """Interactive loop against the remote server"""
        self.console.print(Panel(
            f"[bold cyan]SAM Remote CLI[/bold cyan]\n\n"
            f"[dim]Server:[/dim] {self.server_url}\n"
            f"[dim]Session ID:[/dim] {self.session_id}\n\n"
            "Commands: [cyan]/health[/cyan], [cyan]/mode outbound|inbound[/cyan], "
            "[cyan]/reset[/cyan], [cyan]/exit[/cyan]",
            border_style="cyan",
            padding=(1, 2)
        ))

        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]", console=self.console)
            except (EOFError, KeyboardInterrupt):
                break

            text = user_input.strip()
            if not text:
                continue
            if text in ("/exit", "/quit"):
                break
            if text == "/health":
                await self.health_check()
            elif text.startswith("/mode"):
                parts = text.split()
                if len(parts) == 2:
                    await self.set_mode(parts[1].lower())
                else:
                    self.console.print("Usage: /mode outbound|inbound")
            elif text == "/reset":
                await self.clear_session()
            elif text.startswith("/"):
                self.console.print(f"[red]Unknown command: {text}[/red]")
            else:
                await self.send(text)

        self.console.print("\n[bold cyan]Thank you for using SAM![/bold cyan]")

    async def close(self):
        await self.client.aclose()


async def run_remote(
    server_url: str,
    session_id: str,
    prompt: Optional[str] = None,
    mode: Optional[str] = None
) -> int:
    """Entry point used by ``python -m cli --server``"""
    remote = RemoteClient(server_url, session_id=session_id)
    try:
        if not await remote.health_check():
            return 1
        if mode:
            await remote.set_mode(mode)
        if prompt:
            return 0 if await remote.send(prompt) is not None else 1
        await remote.run_interactive()
        return 0
    finally:
        await remote.close()
