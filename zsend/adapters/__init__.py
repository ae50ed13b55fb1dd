"""Adapter package for external I/O implementations.

Purpose:
    Concrete implementations of the domain ports: the wallet REST bridge,
    an offline wallet double, and local JSON settings storage.

Dependencies:
    ``requests`` for HTTP, filesystem APIs, and the domain protocol definitions.

Call context:
    Imported by ``zsend.app`` for runtime wiring and by tests.
"""
