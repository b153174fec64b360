"""Translation providers and the session translation cache."""
