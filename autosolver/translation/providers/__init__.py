"""Translation provider implementations."""
