"""Exercise classification and solving."""
