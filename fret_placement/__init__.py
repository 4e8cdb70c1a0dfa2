"""Fret placement calculator for historical and theoretical tuning systems."""
