"""Command line interface for smsfin."""
