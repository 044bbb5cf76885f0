"""Form and booking validation."""
