"""Core configuration for GeoSnap Stage."""
