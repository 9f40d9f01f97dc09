"""Terminal UI for the SAM CLI

Rich-based terminal interface providing:
- Interactive REPL mode
- Markdown rendering for SAM responses and follow-up suggestions
- Trace tables for the last processed message
- Slash command handling
"""

import asyncio
from typing import List, Optional

from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.prompt import Prompt
from rich.table import Table

from app.agent.agent_system import AgentSystem
from orchestration.rendering import render_message
from orchestration.types import AgentTrace, OperationMode, ProcessResult, Sender


class TerminalUI:
    """Rich-based terminal user interface"""

    def __init__(
        self,
        system: AgentSystem,
        session_id: str = "cli",
        loop: Optional[asyncio.AbstractEventLoop] = None,
        console: Optional[Console] = None
    ):
        """Initialize terminal UI

        Args:
            system: Initialized agent system
            session_id: Conversation session used for every message
            loop: Event loop the agent system was initialized on
            console: Console to print to
        """
        self.system = system
        self.session_id = session_id
        self.loop = loop or asyncio.new_event_loop()
        self.console = console or Console()
        self.last_trace: List[AgentTrace] = []

    def _run(self, coro):
        return self.loop.run_until_complete(coro)

    def start_interactive(self):
        """Start interactive REPL mode"""
        self._show_welcome()

        while True:
            try:
                user_input = Prompt.ask("\n[bold cyan]You[/bold cyan]")

                if not user_input.strip():
                    continue

                if user_input.startswith("/"):
                    self._handle_command(user_input)
                    continue

                self.send(user_input)

            except KeyboardInterrupt:
                self.console.print("\n[yellow]Use /exit or Ctrl+D to quit[/yellow]")
                continue
            except EOFError:
                self._handle_exit()
                break

    def execute_one_shot(self, prompt: str):
        """Process a single message and exit

        Args:
            prompt: User message
        """
        self.console.print(Panel(
            f"[cyan]Message:[/cyan] {prompt}",
            title="SAM - One-shot Mode",
            border_style="cyan"
        ))
        self.send(prompt)

    def send(self, message: str) -> ProcessResult:
        """Process a message and display the response"""
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=self.console,
            transient=True
        ) as progress:
            progress.add_task("[cyan]SAM is thinking...", total=None)
            result = self._run(self.system.process_message(message, session_id=self.session_id))

        self.last_trace = list(result.trace)
        self._display_response(result)
        return result

    def _display_response(self, result: ProcessResult):
        response = result.response
        self.console.print("\n[bold magenta]SAM:[/bold magenta]")
        self.console.print(Markdown(render_message(response)))

        failed = [t for t in result.trace if not t.success]
        if failed:
            self.console.print(f"[dim]{len(failed)} step(s) failed, see /trace[/dim]")

    def _handle_command(self, command: str):
        """Handle slash commands

        Args:
            command: Command string (starting with /)
        """
        cmd_parts = command[1:].split()
        if not cmd_parts:
            return

        cmd_name = cmd_parts[0].lower()
        cmd_args = cmd_parts[1:]

        if cmd_name == "help":
            self._cmd_help()
        elif cmd_name == "status":
            self._cmd_status()
        elif cmd_name == "history":
            self._cmd_history()
        elif cmd_name == "trace":
            self._cmd_trace()
        elif cmd_name == "health":
            self._cmd_health()
        elif cmd_name == "mode":
            self._cmd_mode(cmd_args)
        elif cmd_name == "clear":
            self.console.clear()
        elif cmd_name in ["exit", "quit"]:
            raise EOFError()
        else:
            self.console.print(f"[red]Unknown command: {cmd_name}[/red]")
            self.console.print("Type [cyan]/help[/cyan] for available commands")

    def _cmd_help(self):
        """Show help message"""
        help_text = """
# Available Commands

## Conversation
- `/status` - Show current session status
- `/history` - Show conversation history
- `/trace` - Show the orchestration trace of the last message

## Agents
- `/health` - Show the health of every agent
- `/mode outbound|inbound` - Switch the active specialist team

## Utility
- `/clear` - Clear terminal screen
- `/help` - Show this help message
- `/exit` or `/quit` - Exit CLI (also Ctrl+D)
        """
        self.console.print(Markdown(help_text))

    def _cmd_status(self):
        """Show session status"""
        orchestrator = self.system.get_orchestrator()
        context = self._run(orchestrator.context_store.get(self.session_id))

        table = Table(show_header=False, box=None)
        table.add_column("Key", style="cyan")
        table.add_column("Value")

        table.add_row("Session ID", self.session_id)
        table.add_row("Mode", orchestrator.operation_mode.value)
        table.add_row("Specialists", str(len(self.system.specialists)))
        table.add_row("Messages", str(len(context.messages) if context else 0))
        table.add_row("Completed Tasks", str(len(context.completed_tasks) if context else 0))
        if context:
            table.add_row("Updated", context.updated_at.isoformat(timespec="seconds"))

        self.console.print(Panel(table, title="Session Status", border_style="cyan"))

    def _cmd_history(self):
        """Show conversation history"""
        context = self._run(self.system.get_orchestrator().context_store.get(self.session_id))

        if context is None or not context.messages:
            self.console.print("[yellow]No conversation history yet[/yellow]")
            return

        history = context.messages
        self.console.print(f"\n[bold cyan]Conversation History[/bold cyan] ({len(history)} messages)\n")

        for i, msg in enumerate(history, 1):
            is_user = msg.sender == Sender.USER
            role_color = "cyan" if is_user else "magenta"
            role_name = "You" if is_user else "SAM"
            detail = f" · {msg.intent.value}" if msg.intent else ""

            self.console.print(
                f"[bold {role_color}][{i}] {role_name}[/bold {role_color}] "
                f"({msg.timestamp.strftime('%H:%M:%S')}{detail})"
            )

            content = msg.content
            if len(content) > 200:
                content = content[:200] + "..."

            self.console.print(f"  {content}\n")

    def _cmd_trace(self):
        """Show trace of the last message"""
        if not self.last_trace:
            self.console.print("[yellow]No message processed yet[/yellow]")
            return

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Agent")
        table.add_column("Action")
        table.add_column("ms", justify="right")
        table.add_column("Status")

        for i, entry in enumerate(self.last_trace, 1):
            status = "[green]ok[/green]" if entry.success else f"[red]{entry.error or 'failed'}[/red]"
            table.add_row(str(i), entry.agent_type.value, entry.action, f"{entry.duration:.1f}", status)

        self.console.print(table)

    def _cmd_health(self):
        """Show agent health"""
        report = self._run(self.system.health_check())

        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Agent")
        table.add_column("Healthy")
        for agent, healthy in report.items():
            table.add_row(agent, "[green]✓[/green]" if healthy else "[red]✗[/red]")

        self.console.print(table)

    def _cmd_mode(self, args: List[str]):
        """Switch operation mode"""
        orchestrator = self.system.get_orchestrator()
        if not args:
            self.console.print(f"Current mode: [cyan]{orchestrator.operation_mode.value}[/cyan]")
            return

        try:
            mode = OperationMode(args[0].lower())
        except ValueError:
            self.console.print(f"[red]Unknown mode: {args[0]}[/red] (use outbound or inbound)")
            return

        orchestrator.set_operation_mode(mode)
        team = ", ".join(t.value for t in orchestrator.active_team()) or "none registered"
        self.console.print(f"[green]✓[/green] Mode: {mode.value} (team: {team})")

    def _handle_exit(self):
        """Handle exit"""
        self.console.print("\n[bold cyan]Thank you for using SAM![/bold cyan]")

    def _show_welcome(self):
        """Show welcome message"""
        welcome_text = f"""
[bold cyan]SAM CLI[/bold cyan] - Your AI Sales & Communications Expert

[dim]Session ID:[/dim] {self.session_id}
[dim]Mode:[/dim] {self.system.get_orchestrator().operation_mode.value}
[dim]Specialists:[/dim] {len(self.system.specialists)}

Type your message or use slash commands (type [cyan]/help[/cyan] for available commands)
Press [cyan]Ctrl+D[/cyan] to exit
        """

        self.console.print(Panel(
            welcome_text.strip(),
            border_style="cyan",
            padding=(1, 2)
        ))
