#!/usr/bin/env python3
"""Basic usage example"""

import asyncio

from relaylog import DEFAULT_LEVELS, LoggerBuilder
from relaylog.formatters import CompactFormatter, JSONFormatter
from relaylog.transports import FileTransport, TcpTransport


async def main():
    # Create logger with builder pattern
    logger = await (LoggerBuilder()
        .with_name("example")
        .with_formatter(CompactFormatter())
        .with_console(std="err", colored=True)
        .build())

    # Hold log calls while optional transports are connected
    logger.suspend()
    logger.info("Connecting optional transports")

    try:
        await logger.use(TcpTransport(DEFAULT_LEVELS, "127.0.0.1", 8080, timeout=0.25))
    except ConnectionError:
        logger.warn('Unable to connect to "%s:%d"', "127.0.0.1", 8080)

    await logger.use(
        FileTransport(DEFAULT_LEVELS, "logs/example.log", formatter=JSONFormatter())
        .disable("trace", "debug")
    )

    logger.on_error.subscribe(lambda error: print(f"transport failed: {error!r}"))
    logger.resume()

    # Log messages
    (logger
        .log("info", "log/info Hello")
        .trace("This is trace")
        .debug("Hello %s", "World")
        .info("Application started")
        .notice("Hello %s", "World")
        .warn("Disk usage at %d%%", 91)
        .error("This is error")
        .critical("This is critical"))

    # Flush and shutdown
    await logger.flush()
    await logger.dispose()


if __name__ == "__main__":
    asyncio.run(main())
