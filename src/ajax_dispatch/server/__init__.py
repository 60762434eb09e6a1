"""ASGI hosting for a ``Dispatcher``.

The dispatcher core is synchronous and host-agnostic; this package adapts
it to ASGI servers.
"""
