"""Structured logging via structlog.

Configures structlog once at process startup. Library modules keep using
``logging.getLogger(__name__)``; the stdlib bridge routes their output
through the same renderer.

Renderer selection:
  debug=True   `ConsoleRenderer` with colours for local use.
  debug=False  `JSONRenderer` for machine-parseable build logs.

ContextVar injection:
  The `bundle` field is injected into every structlog line from a
  context var set with `bind_bundle_name()`, so a build log that packs
  several components stays attributable.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

import structlog

_bundle_name_var: ContextVar[str] = ContextVar("bundle_name", default="")


def get_bundle_name() -> str:
    """Return the bundle currently being packed, or empty string if not set."""
    return _bundle_name_var.get()


@contextmanager
def bind_bundle_name(name: str) -> Iterator[None]:
    token = _bundle_name_var.set(name)
    try:
        yield
    finally:
        _bundle_name_var.reset(token)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject the bundle name from the ContextVar."""
    bundle = get_bundle_name()
    if bundle:
        event_dict["bundle"] = bundle
    return event_dict


def configure_structlog(debug: bool = False) -> None:
    """Configure structlog for the process lifetime.

    Safe to call more than once; each call replaces the root handler.
    """
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.DEBUG if debug else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging → structlog so the bundler modules (which use
    # logging.getLogger) get the same processors and renderer.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(logging.DEBUG if debug else logging.INFO)
