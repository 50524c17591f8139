"""Core module for service settings, exceptions, and structured logging."""
