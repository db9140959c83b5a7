"""Data model, mutation engine and validation for rail-network map editing.

Analysis and validation logic stays in pure functions (`graph`, `validation`,
`derived`); `store` owns mutation and `io` owns every boundary with the outside.
"""

__version__ = "0.1.0"
