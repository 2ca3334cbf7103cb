"""Command-line tools for the landing-page form handler."""
