"""Style operations shared by the format and verify commands."""
