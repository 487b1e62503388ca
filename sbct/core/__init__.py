"""Core — engine, context, contracts, and logging."""
