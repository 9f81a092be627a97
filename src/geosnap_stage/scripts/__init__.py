"""Operational scripts for GeoSnap Stage."""
