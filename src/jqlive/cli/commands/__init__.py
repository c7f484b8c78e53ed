"""jqlive CLI commands."""
