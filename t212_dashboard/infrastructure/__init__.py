"""Infrastructure adapters: HTTP clients, CSV parsing, logging, events."""
