"""SAM CLI - Command Line Interface

Interactive CLI for the SAM orchestrator that provides:
- Interactive REPL mode for conversations with SAM
- One-shot mode for single messages
- Operation mode switching (outbound/inbound)
- Rich terminal UI with trace inspection

Usage:
    # Interactive mode
    python -m cli

    # One-shot mode
    python -m cli "Looking for leads in sales navigator for CTOs"

    # With options
    python -m cli --mode inbound --session-id demo

    # Against a running server
    python -m cli --server http://localhost:8000
"""

import sys
import asyncio
import logging
import argparse
from pathlib import Path

# Add backend to path if running as module
backend_dir = Path(__file__).parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from app.agent.agent_system import create_agent_system
from app.core.config import settings
from cli.remote_client import run_remote
from cli.terminal_ui import TerminalUI


def parse_args(argv=None):
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description="SAM - AI sales assistant (orchestrator-worker CLI)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sam-orchestrator                                   # Start interactive mode
  sam-orchestrator "Looking for leads in sales navigator for CTOs"  # One-shot mode
  sam-orchestrator -s demo                           # Use session 'demo'
  sam-orchestrator --mode inbound                    # Start with the inbound team
  sam-orchestrator --server http://localhost:8000    # Use a running SAM server

Slash Commands (in interactive mode):
  /help       - Show available commands
  /status     - Show current session status
  /history    - Show conversation history
  /trace      - Show the trace of the last message
  /mode       - Switch operation mode
  /exit       - Exit CLI (also Ctrl+D)
        """
    )

    parser.add_argument(
        "prompt",
        nargs="*",
        help="Optional message for one-shot mode. If not provided, starts interactive mode."
    )

    parser.add_argument(
        "-s", "--session-id",
        default="cli",
        help="Conversation session identifier (default: cli)"
    )

    parser.add_argument(
        "--mode",
        choices=["outbound", "inbound"],
        default=None,
        help=f"Operation mode (default: {settings.default_operation_mode})"
    )

    parser.add_argument(
        "--server",
        default=None,
        help="URL of a running SAM server; talk to it instead of running agents locally"
    )

    parser.add_argument(
        "--version",
        action="version",
        version="SAM CLI v1.0.0"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Main CLI entry point"""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if args.server:
        prompt = " ".join(args.prompt) if args.prompt else None
        try:
            return asyncio.run(run_remote(args.server, args.session_id, prompt, args.mode))
        except KeyboardInterrupt:
            print("\n\nExiting SAM CLI...")
            return 0

    mode = args.mode or settings.default_operation_mode
    loop = asyncio.new_event_loop()
    system = None
    try:
        system = loop.run_until_complete(
            create_agent_system(settings.model_copy(update={"default_operation_mode": mode}))
        )
        ui = TerminalUI(system, session_id=args.session_id, loop=loop)

        if args.prompt:
            ui.execute_one_shot(" ".join(args.prompt))
        else:
            ui.start_interactive()

    except KeyboardInterrupt:
        print("\n\nExiting SAM CLI...")
        return 0
    except Exception as e:
        print(f"\n❌ Error: {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1
    finally:
        if system is not None:
            loop.run_until_complete(system.shutdown())
        loop.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
