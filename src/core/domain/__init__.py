"""Domain models.

Only the export envelope lives here: the user payload itself is opaque.
"""
