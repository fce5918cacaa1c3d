"""Geometry, validation and reporting over AGSi documents."""
