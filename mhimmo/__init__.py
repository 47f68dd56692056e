"""Relational data layer for rental-property management."""
