"""Painting-time statistics from the Krita session history log."""
