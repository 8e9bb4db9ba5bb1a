"""
Logging sanitization for sensitive data protection.

Error text from the database driver can carry connection strings with
credentials. This processor keeps them out of log output.
"""

import re
from typing import Any, Dict, List

# Sensitive field patterns (case-insensitive substring match on keys)
SENSITIVE_FIELD_PATTERNS = {
    'password', 'passwd', 'secret', 'token', 'api_key', 'apikey',
    'authorization', 'private_key', 'session_key',
}

REPLACEMENT_TEXT = "***REDACTED***"

_URL_CREDENTIALS = re.compile(r'://([^:/@\s]+):([^@/\s]+)@')


class LogSanitizer:
    """Sanitizes sensitive data from log output."""

    @classmethod
    def sanitize_url(cls, text: str) -> str:
        """Replace user:password@ credentials in any URL inside the text."""
        return _URL_CREDENTIALS.sub(r'://\1:***@', text)

    @classmethod
    def sanitize_value(cls, value: Any, max_depth: int = 5) -> Any:
        if isinstance(value, str):
            return cls.sanitize_url(value)
        if max_depth <= 0:
            return value
        if isinstance(value, dict):
            return cls.sanitize_dict(value, max_depth - 1)
        if isinstance(value, list):
            return cls._sanitize_list(value, max_depth - 1)
        return value

    @classmethod
    def _sanitize_list(cls, data: List[Any], max_depth: int) -> List[Any]:
        return [cls.sanitize_value(item, max_depth) for item in data]

    @classmethod
    def sanitize_dict(cls, data: Dict[str, Any], max_depth: int = 5) -> Dict[str, Any]:
        """
        Sanitize a dictionary, redacting sensitive keys and URL credentials.

        Args:
            data: Dictionary to sanitize
            max_depth: Maximum recursion depth

        Returns:
            New dictionary with sensitive values redacted
        """
        sanitized = {}
        for key, value in data.items():
            lowered = str(key).lower()
            if any(pattern in lowered for pattern in SENSITIVE_FIELD_PATTERNS):
                sanitized[key] = REPLACEMENT_TEXT
            else:
                sanitized[key] = cls.sanitize_value(value, max_depth)
        return sanitized


class StructlogSanitizer:
    """Structlog processor for sanitizing log events."""

    def __init__(self, sanitizer: type = LogSanitizer):
        self.sanitizer = sanitizer

    def __call__(self, logger, method_name, event_dict):
        return self.sanitizer.sanitize_dict(event_dict)
