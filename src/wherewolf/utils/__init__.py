"""Utility helpers for wherewolf."""
