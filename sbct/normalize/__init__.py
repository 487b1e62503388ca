"""Normalize — canonical rewrites for dispositions, attributes, equipment, and mounts."""
