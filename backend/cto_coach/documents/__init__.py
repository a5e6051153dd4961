"""Document extraction, classification, scoring and management."""
