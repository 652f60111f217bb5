"""Queries (read operations) and their handlers."""
