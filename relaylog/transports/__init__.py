"""Transports module - Log destinations"""

from relaylog.transports.transport_base import TransportBase
from relaylog.transports.format_transport import FormatTransport
from relaylog.transports.writer_transport import WriterTransport
from relaylog.transports.console_transport import ConsoleTransport
from relaylog.transports.file_transport import FileTransport
from relaylog.transports.connection_stats import ConnectionStats
from relaylog.transports.tcp_transport import TcpTransport
from relaylog.transports.webhook_transport import WebhookTransport

__all__ = [
    "TransportBase",
    "FormatTransport",
    "WriterTransport",
    "ConsoleTransport",
    "FileTransport",
    "ConnectionStats",
    "TcpTransport",
    "WebhookTransport",
]
