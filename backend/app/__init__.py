"""Production status and report aggregation service."""
