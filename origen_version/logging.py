# ============================================================
# SPDX-License-Identifier: GPL-3.0-or-later
# This program is part of the Origen version service project.
# Copyright (C) 2026  The Origen version service authors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.
# ============================================================
"""Structlog configuration for the Origen version service.

This module configures structlog with:
- Service name and version automatically added to all log entries
- Request ID correlation for tracing requests across log entries
- JSON or console output format based on configuration
- A version banner emitted once at startup
"""

import logging
import sys
from contextvars import ContextVar
from typing import Any

import structlog

from origen_version import __service_name__
from origen_version.config import Settings
from origen_version.version import VERSION_DESCRIPTOR, VersionDescriptor

# Context variable for request-scoped logging
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


class ServiceContext:
    """Structlog processor adding service name and version to all log entries.

    The version is rendered once from the descriptor the service was built
    with, so log entries always agree with what the endpoints report.
    """

    def __init__(self, descriptor: VersionDescriptor) -> None:
        """Initialize the processor.

        Args:
            descriptor: The version descriptor the service reports.
        """
        self.version = descriptor.render()

    def __call__(
        self, logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        """Add service context to a log entry.

        Args:
            logger: The logger instance (unused).
            method_name: The logging method name (unused).
            event_dict: The event dictionary to modify.

        Returns:
            The modified event dictionary with service context.
        """
        event_dict["service"] = __service_name__
        event_dict.setdefault("version", self.version)
        return event_dict


def add_request_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Add the request ID to log entries emitted while serving a request.

    Args:
        logger: The logger instance (unused).
        method_name: The logging method name (unused).
        event_dict: The event dictionary to modify.

    Returns:
        The modified event dictionary with request context.
    """
    request_id = request_id_ctx.get()
    if request_id is not None:
        event_dict["request_id"] = request_id
    return event_dict


def configure_logging(
    settings: Settings, descriptor: VersionDescriptor | None = None
) -> None:
    """Configure structlog for the Origen version service.

    Args:
        settings: The service settings containing log configuration.
        descriptor: The version descriptor stamped on every log entry.
                    Defaults to the package's own version.
    """
    if descriptor is None:
        descriptor = VERSION_DESCRIPTOR

    log_level = getattr(logging, settings.log_level, logging.INFO)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        ServiceContext(descriptor),
        add_request_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.log_format == "json":
        processors: list[structlog.types.Processor] = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    logging.getLogger("uvicorn").setLevel(log_level)
    logging.getLogger("uvicorn.access").setLevel(log_level)
    logging.getLogger("uvicorn.error").setLevel(log_level)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger instance.

    Args:
        name: Optional logger name.

    Returns:
        A bound structlog logger instance.
    """
    return structlog.get_logger(name)


def log_version_banner(
    descriptor: VersionDescriptor,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> None:
    """Emit the startup banner for the given version descriptor.

    Args:
        descriptor: The version descriptor to announce.
        logger: Optional logger to write to. Defaults to this module's logger.
    """
    if logger is None:
        logger = get_logger(__name__)
    logger.info(
        "version_banner",
        version=descriptor.render(),
        major=descriptor.major,
        minor=descriptor.minor,
        bugfix=descriptor.bugfix,
        dev_iteration=descriptor.dev_iteration,
        release=descriptor.is_release,
    )
