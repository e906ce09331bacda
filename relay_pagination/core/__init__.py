"""Pagination core: algorithm, storage collaborators, settings and errors."""
