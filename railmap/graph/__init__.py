"""Graph analysis over stations and tracks (pure functions only)."""
