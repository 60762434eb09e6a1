"""Dispatcher configuration.

DispatcherConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DispatcherConfig:
    """Dispatcher configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = DispatcherConfig(discriminator="action")
    """

    # Request parameter whose value selects the handler
    discriminator: str = "handler"

    # Transport guard: only XMLHttpRequest-issued requests are dispatched
    ajax_header: str = "X-Requested-With"
    ajax_header_value: str = "XMLHttpRequest"

    # ASGI adapter limits
    max_body_size: int = 1024 * 1024  # 1 MB
