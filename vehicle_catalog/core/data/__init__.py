"""Ingestion pipeline and storage."""
