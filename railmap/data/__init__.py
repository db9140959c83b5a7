"""Sample maps shipped with the package."""
