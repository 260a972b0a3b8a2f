"""Pure conversion algorithms."""
