"""Process-level settings and logging setup."""
