"""Click command handlers for the gitmeta CLI."""
