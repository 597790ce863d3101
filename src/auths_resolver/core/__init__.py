"""Constants and exceptions shared across the resolver."""
