"""Inkwell blogging backend."""
