"""Extract — block splitting, field extraction, and classification."""
