"""Inbound webhooks: lead ingestion and provider delivery events."""
