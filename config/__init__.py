"""Per-mode configuration constants."""
