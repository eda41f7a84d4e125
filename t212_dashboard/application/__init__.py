"""Application layer: command/query handlers and analytics reducers."""
