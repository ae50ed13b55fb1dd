"""Use-case layer for the send workflow.

Each module coordinates domain objects and the wallet port without performing
transport I/O directly, preserving MVVM + Hexagonal boundaries.
"""
