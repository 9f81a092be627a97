"""HTTP API for GeoSnap Stage."""
