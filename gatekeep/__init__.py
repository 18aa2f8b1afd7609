"""Gatekeep: user accounts, credentials and access tokens."""
