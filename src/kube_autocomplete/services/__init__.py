"""Service layer orchestrating cache, client and parsing."""
