"""HTTP routes of the mediabot-core service shell."""
