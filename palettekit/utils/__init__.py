"""Utility helpers for palettekit."""
