"""Command-line surface for dotstyle."""
