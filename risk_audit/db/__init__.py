"""Persistence collaborators."""
