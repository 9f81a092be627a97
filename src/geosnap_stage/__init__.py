"""GeoSnap Stage: voting and moderation service for a location-tagged photo feed."""

__version__ = "0.1.0"
