"""Breakfast example domain used to exercise fixtures end to end."""
