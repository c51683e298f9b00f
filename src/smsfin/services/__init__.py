"""Services layered on top of the SMS parsers."""
