"""Infrastructure adapters: persistence, media and the command line."""
