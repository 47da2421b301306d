"""HTTP API for triggering reminder runs."""
