"""Small shared helpers: JSON output and CLI exit codes."""
