"""
Custom exceptions for smsfin.

All smsfin-specific exceptions inherit from SMSFinError for easy catching.

A parse that finds no transaction is not an error: the pipeline returns None
for unrecognized senders and unparsable bodies. Exceptions are reserved for
broken configuration and unreadable input files.
"""


class SMSFinError(Exception):
    """Base exception for all smsfin errors."""

    def __init__(self, message: str, code: str = None):
        super().__init__(message)
        self.message = message
        self.code = code


class PatternConfigError(SMSFinError):
    """Raised when a bank pattern set or registry is malformed."""

    def __init__(self, message: str, bank_id: str = None, code: str = "PATTERN_CONFIG_ERROR"):
        super().__init__(message, code)
        self.bank_id = bank_id


class AmountParseError(SMSFinError):
    """Raised when a captured amount is not a valid number."""

    def __init__(self, raw_value: str, code: str = "AMOUNT_PARSE_ERROR"):
        super().__init__(f"Invalid amount: {raw_value!r}", code)
        self.raw_value = raw_value


class ConfigError(SMSFinError):
    """Raised when parser configuration contains invalid values."""

    def __init__(self, message: str, field: str = None, code: str = "CONFIG_ERROR"):
        super().__init__(message, code)
        self.field = field


class IngestionError(SMSFinError):
    """Raised when an SMS export file cannot be loaded."""

    def __init__(self, message: str, source_file: str = None, code: str = "INGESTION_ERROR"):
        super().__init__(message, code)
        self.source_file = source_file
