"""Utility helpers for the requirement wizard."""
