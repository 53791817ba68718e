"""JSON-schema contracts for archive payloads and the rule cache."""
