from typing import Any, Callable, Dict, List, Optional

import pytest
import websocket

from wdpdbg import CommandQueue, CommandRunner, TransportConfig, TransportError, WebSocketTransport


class FakeWebSocketApp:
    """Replays a scripted session through the callbacks run_forever would fire."""

    instances: List["FakeWebSocketApp"] = []
    script: Optional[Callable[["FakeWebSocketApp"], None]] = None

    def __init__(self, url, header=None, on_open=None, on_message=None, on_error=None, on_close=None, **_):
        self.url = url
        self.header = header
        self.on_open = on_open
        self.on_message = on_message
        self.on_error = on_error
        self.on_close = on_close
        self.sent: List[str] = []
        self.closed = False
        self.run_kwargs: Dict[str, Any] = {}
        FakeWebSocketApp.instances.append(self)

    def run_forever(self, **kwargs):
        self.run_kwargs = kwargs
        script = type(self).script
        if script is not None:
            try:
                script(self)
            except Exception as exc:
                self.on_error(self, exc)
        self.on_close(self, None, None)
        return False

    def send(self, data):
        if self.closed:
            raise websocket.WebSocketConnectionClosedException("socket is already closed.")
        self.sent.append(data)

    def close(self, **_):
        self.closed = True

    def deliver(self, message):
        # websocket-client routes callback exceptions to on_error
        try:
            self.on_message(self, message)
        except Exception as exc:
            self.on_error(self, exc)


@pytest.fixture
def fake_app(monkeypatch):
    FakeWebSocketApp.instances = []
    FakeWebSocketApp.script = None
    monkeypatch.setattr(websocket, "WebSocketApp", FakeWebSocketApp)
    return FakeWebSocketApp


def test_connect_runs_loop_without_reconnect(fake_app):
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1")
    opened = []
    closed = []
    transport.register_on_open(lambda: opened.append(transport.state))
    transport.register_on_close(lambda: closed.append(True))

    fake_app.script = lambda app: app.on_open(app)
    transport.connect()

    app = fake_app.instances[0]
    assert app.url == "ws://localhost:9222/devtools/page/1"
    assert app.run_kwargs == {"suppress_origin": True, "reconnect": 0}
    assert opened == ["connected"]
    assert closed == [True]
    assert transport.state == "closed"


def test_runner_drives_websocket_session(fake_app):
    def script(app):
        app.on_open(app)
        app.deliver('{"id": 1, "result": {}}')
        app.deliver('{"id": 2, "result": {}}')

    fake_app.script = script
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1")
    runner = CommandRunner(transport, CommandQueue(("cmd1", "cmd2")))
    replies = runner.run()

    app = fake_app.instances[0]
    assert app.sent == ["cmd1", "cmd2"]
    assert app.closed
    assert [reply.id for reply in replies] == [1, 2]


def test_connect_failure_raises_transport_error(fake_app):
    refused = ConnectionRefusedError(111, "Connection refused")

    def script(app):
        raise refused

    fake_app.script = script
    transport = WebSocketTransport("ws://localhost:1/devtools/page/1")
    with pytest.raises(TransportError) as excinfo:
        transport.connect()
    assert excinfo.value.__cause__ is refused
    assert transport.state == "closed"


def test_handler_exceptions_surface_from_connect(fake_app):
    def script(app):
        app.on_open(app)
        app.deliver("boom")

    def explode(_text):
        raise ValueError("handler failed")

    fake_app.script = script
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1")
    transport.register_on_message(explode)
    with pytest.raises(TransportError) as excinfo:
        transport.connect()
    assert isinstance(excinfo.value.__cause__, ValueError)
    assert fake_app.instances[0].closed


def test_send_requires_connection():
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1")
    with pytest.raises(TransportError):
        transport.send("{}")


def test_closed_transport_cannot_reconnect(fake_app):
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1")
    transport.connect()
    with pytest.raises(TransportError):
        transport.connect()
    assert len(fake_app.instances) == 1


def test_config_passes_headers_and_origin(fake_app):
    config = TransportConfig(suppress_origin=False, header={"X-Test": "1"})
    transport = WebSocketTransport("ws://localhost:9222/devtools/page/1", config)
    transport.connect()
    app = fake_app.instances[0]
    assert app.header == {"X-Test": "1"}
    assert app.run_kwargs["suppress_origin"] is False
