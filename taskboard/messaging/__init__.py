"""Outbound messaging integrations."""
