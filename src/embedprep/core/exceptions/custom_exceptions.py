"""
Custom exception hierarchy for EmbedPrep error handling.

Chunk-level problems (too short, too noisy, duplicate, ...) are never raised:
they travel as data inside ``ValidityResult``. Exceptions are reserved for the
configuration seams of the library, where a caller hands over something that
cannot be interpreted at all (an unknown target type, an override outside the
allowed bounds, an unreadable configuration file).

Exception Hierarchy:
    EmbedPrepError (base)
    └── ConfigurationError: Unknown target types, invalid overrides, bad files

Example:
    >>> try:
    ...     config = get_preprocessing_config("newsletter")
    ... except ConfigurationError as e:
    ...     logger.error("Configuration issue",
    ...                  error_code=e.error_code,
    ...                  details=e.details)
"""

from typing import Any, Dict, Optional


class EmbedPrepError(Exception):
    """
    Base exception class for all EmbedPrep errors.

    Attributes:
        message (str): Human-readable error description
        error_code (str): Machine-readable error identifier
        details (Dict[str, Any]): Additional contextual information

    The error_code follows a MODULE_OPERATION_ERROR convention
    (e.g. "CONFIG_UNKNOWN_TARGET_TYPE") and defaults to the class name.

    Example:
        >>> raise EmbedPrepError(
        ...     "Override rejected",
        ...     error_code="CONFIG_OVERRIDE_INVALID",
        ...     details={"target_type": "post", "field": "chunking.overlap"}
        ... )
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigurationError(EmbedPrepError):
    """
    Raised when preprocessing configuration cannot be resolved or validated.

    Common scenarios:
        - A target type outside {product, post, gallery_item, comment}
        - A per-type override with out-of-bounds values
        - Cross-field conflicts such as overlap >= target_size
        - YAML/JSON override files that are missing or malformed

    Example:
        >>> raise ConfigurationError(
        ...     "Unknown target type 'newsletter'",
        ...     error_code="CONFIG_UNKNOWN_TARGET_TYPE",
        ...     details={"known_types": ["product", "post"]}
        ... )
    """

    pass
