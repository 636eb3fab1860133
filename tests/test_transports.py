"""Tests for transports"""

import asyncio
import sys
from unittest.mock import Mock, patch

import pytest
import requests

from relaylog import (
    DEFAULT_LEVELS,
    AlreadyDisposedError,
    LogRecord,
    NotReadyError,
    TransportStateError,
    WebhookError,
)
from relaylog.transports import (
    ConnectionStats,
    ConsoleTransport,
    FileTransport,
    FormatTransport,
    TcpTransport,
    TransportBase,
    WebhookTransport,
    WriterTransport,
)


def make_record(level="info", message="hello", *args):
    return LogRecord(
        level=DEFAULT_LEVELS.index(level),
        message=message,
        arguments=args,
        name="test",
        level_name=DEFAULT_LEVELS.name(level),
    )


class MemoryStream:
    """Binary stream collecting written chunks."""

    def __init__(self):
        self.chunks = []
        self.flushes = 0
        self.closed = False

    def write(self, data):
        self.chunks.append(bytes(data))

    def flush(self):
        self.flushes += 1

    def close(self):
        self.closed = True

    @property
    def text(self):
        return b"".join(self.chunks).decode("utf-8")


class SlowTransport(TransportBase):
    """Transport whose sink takes a message-dependent time to accept a write."""

    def __init__(self, delays):
        super().__init__(DEFAULT_LEVELS)
        self.delays = delays
        self.written = []
        self.active = 0
        self.peak = 0

    async def handle(self, data):
        self.active += 1
        self.peak = max(self.peak, self.active)
        message = data.decode().split(" ", 1)[1]
        await asyncio.sleep(self.delays.get(message, 0))
        self.written.append(message)
        self.active -= 1


class TestTransportBase:
    """Test transport lifecycle and the private write queue."""

    def test_initial_state(self):
        transport = WriterTransport(DEFAULT_LEVELS, stream=MemoryStream())
        assert transport.initialized is False
        assert transport.disposed is False
        assert "unconfigured" in repr(transport)

    def test_is_transport(self):
        class DuckTransport:
            levels = 0
            initialized = False
            disposed = False

            def init(self): pass
            def dispose(self): pass
            def push(self, record): pass
            def enable(self, *levels): return self
            def disable(self, *levels): return self
            def emits(self, *levels): return True

        assert TransportBase.is_transport(WriterTransport(DEFAULT_LEVELS))
        assert TransportBase.is_transport(DuckTransport())
        assert not TransportBase.is_transport(DuckTransport)
        assert not TransportBase.is_transport(object())
        assert not TransportBase.is_transport(None)

    def test_lifecycle(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream)

            await transport.init()
            assert transport.initialized is True
            assert "initialized" in repr(transport)

            with pytest.raises(TransportStateError):
                await transport.init()

            await transport.dispose()
            assert transport.disposed is True
            assert stream.closed is True

            with pytest.raises(AlreadyDisposedError):
                await transport.init()
            with pytest.raises(AlreadyDisposedError):
                await transport.push(make_record())

        asyncio.run(scenario())

    def test_handle_not_implemented(self):
        async def scenario():
            transport = TransportBase(DEFAULT_LEVELS)
            await transport.init()
            with pytest.raises(NotImplementedError):
                await transport.push(make_record())

        asyncio.run(scenario())

    def test_filtered_level_is_silent(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream, enabled=["error"])
            await transport.init()
            result = await transport.push(make_record("info"))
            return result, stream.chunks

        assert asyncio.run(scenario()) == (None, [])

    def test_default_rendering(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream)
            await transport.init()
            await transport.push(make_record("warning", "Hello %s", "World"))
            return stream.text

        assert asyncio.run(scenario()) == "warn Hello World\n"

    def test_push_before_init_waits(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream)

            pending = asyncio.ensure_future(transport.push(make_record()))
            await asyncio.sleep(0.01)
            assert stream.chunks == []

            await transport.init()
            await pending
            return stream.text

        assert asyncio.run(scenario()) == "info hello\n"

    def test_writes_keep_submission_order(self):
        async def scenario():
            transport = SlowTransport({"first": 0.05, "second": 0.0, "third": 0.02})
            await transport.init()
            await asyncio.gather(
                transport.push(make_record("info", "first")),
                transport.push(make_record("info", "second")),
                transport.push(make_record("info", "third")),
            )
            return transport.written, transport.peak

        written, peak = asyncio.run(scenario())
        assert written == ["first", "second", "third"]
        assert peak == 1

    def test_dispose_completes_queued_writes(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream)
            await transport.init()

            for i in range(3):
                asyncio.ensure_future(transport.push(make_record("info", f"m{i}")))
            await asyncio.sleep(0)

            await transport.dispose()
            return stream.text, stream.closed

        text, closed = asyncio.run(scenario())
        assert text == "info m0\ninfo m1\ninfo m2\n"
        assert closed is True


class TestFormatTransport:
    """Test the formatter slot."""

    def test_get_and_set(self):
        transport = FormatTransport(DEFAULT_LEVELS)
        assert transport.format() is None

        formatter = lambda record: record.message
        assert transport.format(formatter) is transport
        assert transport.format() is formatter

        with pytest.raises(TypeError):
            transport.format("not callable")

    def test_formatter_results(self):
        async def scenario():
            async def async_formatter(record):
                return f"async:{record.message}"

            outputs = []
            for formatter in (
                lambda record: f"text:{record.message}",
                lambda record: b"bytes",
                async_formatter,
            ):
                transport = FormatTransport(DEFAULT_LEVELS, formatter=formatter)
                outputs.append(await transport.to_bytes(make_record()))
            return outputs

        assert asyncio.run(scenario()) == [b"text:hello", b"bytes", b"async:hello"]


class TestWriterTransport:
    """Test stream writing."""

    def test_init_without_stream(self):
        async def scenario():
            transport = WriterTransport(DEFAULT_LEVELS)
            with pytest.raises(NotReadyError):
                await transport.init()
            return transport.initialized

        assert asyncio.run(scenario()) is False

    def test_set_stream_once(self):
        transport = WriterTransport(DEFAULT_LEVELS)
        transport.set_stream(MemoryStream())
        with pytest.raises(TransportStateError):
            transport.set_stream(MemoryStream())

    def test_keeps_borrowed_stream_open(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(DEFAULT_LEVELS, stream=stream, close=False)
            await transport.init()
            await transport.push(make_record())
            await transport.dispose()
            return stream

        stream = asyncio.run(scenario())
        assert stream.closed is False
        assert stream.flushes == 1

    def test_without_newline(self):
        async def scenario():
            stream = MemoryStream()
            transport = WriterTransport(
                DEFAULT_LEVELS,
                stream=stream,
                newline=False,
                formatter=lambda record: record.message,
            )
            await transport.init()
            await transport.push(make_record("info", "a"))
            await transport.push(make_record("info", "b"))
            return stream.text

        assert asyncio.run(scenario()) == "ab"


class TestConsoleTransport:
    """Test console output."""

    def test_unknown_std(self):
        with pytest.raises(ValueError):
            ConsoleTransport(DEFAULT_LEVELS, std="log")

    def test_writes_to_stdout(self, capsys):
        async def scenario():
            transport = ConsoleTransport(DEFAULT_LEVELS, std="out")
            await transport.init()
            await transport.push(make_record("notice", "to stdout"))
            await transport.dispose()

        asyncio.run(scenario())
        captured = capsys.readouterr()
        assert captured.out == "notice to stdout\n"
        assert not sys.stdout.closed

    def test_writes_to_stderr(self, capsys):
        async def scenario():
            transport = ConsoleTransport(DEFAULT_LEVELS, std="err")
            await transport.init()
            await transport.push(make_record("error", "to stderr"))
            await transport.dispose()

        asyncio.run(scenario())
        captured = capsys.readouterr()
        assert captured.err == "error to stderr\n"
        assert captured.out == ""


class TestFileTransport:
    """Test file output."""

    def test_appends_lines(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "app.log"

        async def scenario():
            transport = FileTransport(DEFAULT_LEVELS, log_file)
            await transport.init()
            await transport.push(make_record("info", "one"))
            await transport.push(make_record("error", "two"))
            await transport.dispose()

        asyncio.run(scenario())
        asyncio.run(scenario())
        assert log_file.read_text() == "info one\nerror two\ninfo one\nerror two\n"

    def test_reset_truncates(self, tmp_path):
        log_file = tmp_path / "app.log"
        log_file.write_text("old content\n")

        async def scenario():
            transport = FileTransport(DEFAULT_LEVELS, str(log_file), reset=True)
            await transport.init()
            await transport.push(make_record("info", "fresh"))
            await transport.dispose()
            return transport.stream.closed

        assert asyncio.run(scenario()) is True
        assert log_file.read_text() == "info fresh\n"

    def test_second_init_keeps_written_lines(self, tmp_path):
        log_file = tmp_path / "app.log"

        async def scenario():
            transport = FileTransport(DEFAULT_LEVELS, log_file, reset=True)
            await transport.init()
            await transport.push(make_record("info", "kept"))
            stream = transport.stream
            with pytest.raises(TransportStateError):
                await transport.init()
            assert transport.stream is stream
            await transport.dispose()

        asyncio.run(scenario())
        assert log_file.read_bytes() == b"info kept\n"

    def test_init_after_dispose_creates_no_file(self, tmp_path):
        log_file = tmp_path / "logs" / "never.log"

        async def scenario():
            transport = FileTransport(DEFAULT_LEVELS, log_file)
            await transport.dispose()
            with pytest.raises(AlreadyDisposedError):
                await transport.init()
            return transport

        transport = asyncio.run(scenario())
        assert transport.stream is None
        assert not log_file.exists()
        assert not log_file.parent.exists()


class TestTcpTransport:
    """Test TCP delivery against a local server."""

    def test_sends_records(self):
        async def scenario():
            received = []
            done = asyncio.Event()

            async def handle_client(reader, writer):
                received.append(await reader.read())
                writer.close()
                done.set()

            server = await asyncio.start_server(handle_client, "127.0.0.1", 0)
            port = server.sockets[0].getsockname()[1]

            transport = TcpTransport(DEFAULT_LEVELS, "127.0.0.1", port)
            await transport.init()
            await transport.push(make_record("info", "first"))
            await transport.push(make_record("error", "second"))
            stats = transport.get_stats()

            await transport.dispose()
            await asyncio.wait_for(done.wait(), 2.0)
            server.close()
            await server.wait_closed()
            return received, stats, transport.get_stats()

        received, stats, final_stats = asyncio.run(scenario())
        assert received == [b"info first\nerror second\n"]
        assert stats.messages_sent == 2
        assert stats.bytes_sent == len(b"info first\nerror second\n")
        assert stats.is_connected is True
        assert final_stats.is_connected is False
        assert stats.connect_time_ms is not None
        assert stats.connected_at is not None
        assert stats.success_rate == 1.0

    def test_connection_refused(self):
        async def scenario():
            server = await asyncio.start_server(lambda r, w: None, "127.0.0.1", 0)
            port = server.sockets[0].getsockname()[1]
            server.close()
            await server.wait_closed()

            transport = TcpTransport(DEFAULT_LEVELS, "127.0.0.1", port)
            with pytest.raises(OSError):
                await transport.init()
            return transport

        transport = asyncio.run(scenario())
        assert transport.initialized is False
        assert transport.get_stats().messages_failed == 1

    def test_connect_timeout(self):
        async def never_connects(*args, **kwargs):
            await asyncio.sleep(10)

        async def scenario():
            transport = TcpTransport(DEFAULT_LEVELS, "192.0.2.1", 5140, timeout=0.05)
            with patch("asyncio.open_connection", new=never_connects):
                with pytest.raises(ConnectionError, match="Timed out"):
                    await transport.init()
            return transport

        transport = asyncio.run(scenario())
        assert transport.initialized is False
        assert transport.get_stats().last_error == "connect timeout"

    def test_init_after_dispose_does_not_connect(self):
        opener = Mock()

        async def scenario():
            transport = TcpTransport(DEFAULT_LEVELS, "127.0.0.1", 5140)
            await transport.dispose()
            with patch("asyncio.open_connection", new=opener):
                with pytest.raises(AlreadyDisposedError):
                    await transport.init()
            return transport

        transport = asyncio.run(scenario())
        opener.assert_not_called()
        assert transport.stream is None
        assert transport.get_stats().messages_failed == 0


class TestConnectionStats:
    """Test delivery counters."""

    def test_success_rate(self):
        stats = ConnectionStats()
        assert stats.success_rate is None
        stats.record_sent(10)
        stats.record_sent(5)
        stats.record_failure("refused")
        assert stats.bytes_sent == 15
        assert stats.success_rate == pytest.approx(2 / 3)
        assert stats.last_error == "refused"

    def test_to_dict(self):
        stats = ConnectionStats()
        stats.record_throttle(0.2)
        stats.record_throttle(0.2)
        data = stats.to_dict()
        assert data["throttled"] == 2
        assert data["throttle_seconds"] == pytest.approx(0.4)
        assert data["connected_at"] is None
        assert data["last_error_at"] is None


class TestWebhookTransport:
    """Test webhook posting with a mocked HTTP session."""

    @staticmethod
    def make_session(status_code=204, body=None):
        response = Mock(status_code=status_code, text="", reason="")
        response.json.return_value = body
        session = Mock()
        session.post.return_value = response
        return session

    def test_requires_url(self):
        with pytest.raises(ValueError):
            WebhookTransport(DEFAULT_LEVELS, url="")

    def test_default_payload(self):
        session = self.make_session()

        async def scenario():
            transport = WebhookTransport(
                DEFAULT_LEVELS,
                url="https://hooks.example.com/abc",
                username="relaylog",
                avatar_url="https://example.com/a.png",
                delay=0,
                session=session,
            )
            await transport.init()
            await transport.push(make_record("error", "disk %s failed", "sda"))
            await transport.dispose()
            return transport

        transport = asyncio.run(scenario())
        session.post.assert_called_once()
        args, kwargs = session.post.call_args
        assert args == ("https://hooks.example.com/abc",)
        assert kwargs["json"] == {
            "content": "error disk sda failed",
            "username": "relaylog",
            "avatar_url": "https://example.com/a.png",
        }
        assert transport.get_stats().messages_sent == 1
        # Borrowed session stays open
        session.close.assert_not_called()

    def test_formatter_payloads(self):
        session = self.make_session()

        async def scenario():
            transport = WebhookTransport(
                DEFAULT_LEVELS,
                url="https://hooks.example.com/abc",
                username="relaylog",
                delay=0,
                session=session,
                formatter=lambda record: {"content": record.message, "username": "custom"},
            )
            await transport.init()
            await transport.push(make_record("info", "dict payload"))
            transport.format(lambda record: f"** {record.message} **")
            await transport.push(make_record("info", "text payload"))

        asyncio.run(scenario())
        payloads = [c.kwargs["json"] for c in session.post.call_args_list]
        assert payloads == [
            {"content": "dict payload", "username": "custom"},
            {"content": "** text payload **", "username": "relaylog"},
        ]

    def test_rejected_message(self):
        session = self.make_session(400, {"message": "Invalid Webhook Token"})

        async def scenario():
            transport = WebhookTransport(
                DEFAULT_LEVELS, url="https://hooks.example.com/bad", delay=0, session=session
            )
            await transport.init()
            with pytest.raises(WebhookError, match="Invalid Webhook Token"):
                await transport.push(make_record("error", "boom"))
            return transport

        transport = asyncio.run(scenario())
        assert transport.get_stats().messages_failed == 1

    def test_delay_counted_as_throttle(self):
        session = self.make_session()

        async def scenario():
            transport = WebhookTransport(
                DEFAULT_LEVELS, url="https://hooks.example.com/abc", delay=0.01, session=session
            )
            await transport.init()
            await transport.push(make_record("info", "one"))
            await transport.push(make_record("info", "two"))
            return transport.get_stats()

        stats = asyncio.run(scenario())
        assert stats.messages_sent == 2
        assert stats.throttled == 2
        assert stats.throttle_seconds == pytest.approx(0.02)
        assert stats.is_connected is True

    def test_request_failure(self):
        session = Mock()
        session.post.side_effect = requests.ConnectionError("network down")

        async def scenario():
            transport = WebhookTransport(
                DEFAULT_LEVELS, url="https://hooks.example.com/abc", delay=0, session=session
            )
            await transport.init()
            with pytest.raises(WebhookError, match="network down"):
                await transport.push(make_record("error", "boom"))

        asyncio.run(scenario())

    def test_owned_session_closed_on_dispose(self):
        async def scenario():
            transport = WebhookTransport(DEFAULT_LEVELS, url="https://hooks.example.com/abc")
            await transport.init()
            await transport.dispose()

        with patch("relaylog.transports.webhook_transport.requests.Session") as session_cls:
            asyncio.run(scenario())

        session_cls.return_value.close.assert_called_once()
