"""Core - configuration, errors, logging, security and session handling."""
