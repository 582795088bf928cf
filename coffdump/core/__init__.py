"""Cursor, record models, errors and the layout walker."""
