"""SharePoint list ingestion pipeline.

This package resolves Graph endpoints, fetches list items, and turns
them into content graph nodes with linked image assets.
"""
