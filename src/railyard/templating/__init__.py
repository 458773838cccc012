"""Template integration — expose routing helpers to kida templates."""
