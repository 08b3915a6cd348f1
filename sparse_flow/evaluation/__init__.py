"""Tracking accuracy metrics."""
