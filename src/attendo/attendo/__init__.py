"""Attendo punch tracking package.

The attendance core (state resolution, break continuity, record filtering and
manual record validation) is pure; stores and the Flask controller layer are
thin adapters injected through the container.
"""
