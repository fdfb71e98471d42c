"""Core building blocks: paths, cache, table parsing and configuration."""
