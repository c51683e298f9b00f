"""Message parsers for smsfin."""
