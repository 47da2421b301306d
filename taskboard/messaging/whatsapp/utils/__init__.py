"""Utilities for the WhatsApp integration."""
