"""Application composition for the send screen (no UI toolkit dependency)."""
