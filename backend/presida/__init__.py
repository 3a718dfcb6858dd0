"""Presida billing and account administration service."""
