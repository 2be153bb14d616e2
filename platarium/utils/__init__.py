"""Utility helpers for Platarium."""
