"""AI tools directory: catalogue API with optional AI-ranked search."""
