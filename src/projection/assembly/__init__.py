"""Stencil assembly of the constraint operator and the free acceleration."""
