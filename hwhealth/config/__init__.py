"""Configuration data structures and YAML loading."""
