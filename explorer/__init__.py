"""Country Explorer API."""
