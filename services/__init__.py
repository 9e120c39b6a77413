"""Event service modules."""
