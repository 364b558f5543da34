"""Tamil calendar service: strategy selection, HTTP API and command line."""
