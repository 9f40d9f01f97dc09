"""Unit tests for the SAM CLI"""

import asyncio
import json

import httpx
import pytest
from rich.console import Console

from conftest import StubWorker
from app.agent.agent_system import create_agent_system
from app.core.config import Settings
from cli.__main__ import parse_args
from cli.remote_client import RemoteClient
from cli.terminal_ui import TerminalUI
from orchestration.types import AgentType, OperationMode


@pytest.fixture
def ui():
    loop = asyncio.new_event_loop()
    workers = [
        StubWorker(AgentType.KNOWLEDGE_BASE, result="Hello from SAM"),
        StubWorker(AgentType.INBOX_TRIAGE),
    ]
    system = loop.run_until_complete(create_agent_system(
        Settings(_env_file=None, llm_api_key=None),
        [(w.agent_type, (lambda w=w: w)) for w in workers],
    ))
    console = Console(record=True, width=120, force_terminal=False)
    yield TerminalUI(system, session_id="cli-test", loop=loop, console=console)
    loop.run_until_complete(system.shutdown())
    loop.close()


class TestParseArgs:
    """Test suite for argument parsing"""

    def test_defaults(self):
        args = parse_args([])

        assert args.prompt == []
        assert args.session_id == "cli"
        assert args.debug is False

    def test_one_shot_prompt_and_options(self):
        args = parse_args(["-s", "demo", "--mode", "inbound", "find", "leads"])

        assert args.prompt == ["find", "leads"]
        assert args.session_id == "demo"
        assert args.mode == "inbound"

    def test_invalid_mode(self):
        with pytest.raises(SystemExit):
            parse_args(["--mode", "sideways"])


class TestTerminalUI:
    """Test suite for TerminalUI"""

    def test_one_shot_prints_response(self, ui):
        ui.execute_one_shot("hello")

        output = ui.console.export_text()
        assert "Hello from SAM" in output
        assert "What would you like to do next?" in output
        assert [t.action for t in ui.last_trace][0] == "intent-classification"

    def test_history_and_trace_commands(self, ui):
        ui.send("hello")

        ui._handle_command("/history")
        ui._handle_command("/trace")

        output = ui.console.export_text()
        assert "Conversation History" in output
        assert "response-synthesis" in output

    def test_mode_command(self, ui):
        ui._handle_command("/mode inbound")

        assert ui.system.get_orchestrator().operation_mode == OperationMode.INBOUND
        assert "team: inbox-triage" in ui.console.export_text()

    def test_unknown_mode(self, ui):
        ui._handle_command("/mode sideways")

        assert "Unknown mode: sideways" in ui.console.export_text()
        assert ui.system.get_orchestrator().operation_mode == OperationMode.OUTBOUND

    def test_exit_command(self, ui):
        with pytest.raises(EOFError):
            ui._handle_command("/exit")

    def test_health_command(self, ui):
        ui._handle_command("/health")

        output = ui.console.export_text()
        assert "knowledge-base" in output
        assert "inbox-triage" in output


def sam_server(request):
    """Minimal stand-in for the SAM HTTP API"""
    path = request.url.path
    if path == "/api/health":
        return httpx.Response(200, json={
            "status": "degraded",
            "healthy": False,
            "agents": {"orchestrator": False, "knowledge-base": True},
        })
    if path == "/api/chat":
        body = json.loads(request.content)
        return httpx.Response(200, json={
            "response": {"content": f"echo: {body['message']}"},
            "rendered": f"echo: {body['message']}",
            "session_id": body["session_id"],
            "trace": [],
        })
    if path == "/api/mode":
        if json.loads(request.content)["mode"] not in ("outbound", "inbound"):
            return httpx.Response(422, json={"detail": "invalid mode"})
        return httpx.Response(200, json={"mode": "inbound", "active_team": ["inbox-triage"]})
    return httpx.Response(404, json={"detail": "Not Found"})


class TestRemoteClient:
    """Test suite for RemoteClient"""

    @pytest.fixture
    def remote(self):
        return RemoteClient(
            "http://sam.test/",
            session_id="remote-1",
            console=Console(record=True, width=120, force_terminal=False),
            client=httpx.AsyncClient(transport=httpx.MockTransport(sam_server)),
        )

    @pytest.mark.asyncio
    async def test_health_check_reports_agents(self, remote):
        assert await remote.health_check() is True

        output = remote.console.export_text()
        assert "knowledge-base" in output
        assert "degraded" in output
        await remote.close()

    @pytest.mark.asyncio
    async def test_send_uses_session(self, remote):
        data = await remote.send("hello")

        assert data["session_id"] == "remote-1"
        assert "echo: hello" in remote.console.export_text()
        await remote.close()

    @pytest.mark.asyncio
    async def test_set_mode(self, remote):
        assert await remote.set_mode("inbound") is True
        assert await remote.set_mode("sideways") is False
        await remote.close()

    @pytest.mark.asyncio
    async def test_clear_unknown_session(self, remote):
        assert await remote.clear_session() is False
        await remote.close()

    @pytest.mark.asyncio
    async def test_unreachable_server(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        remote = RemoteClient(
            "http://sam.test",
            console=Console(record=True, width=120, force_terminal=False),
            client=httpx.AsyncClient(transport=httpx.MockTransport(refuse)),
        )

        assert await remote.health_check() is False
        assert "Cannot connect" in remote.console.export_text()
        await remote.close()
