"""
Exceptions raised by the annotation core.

Every error carries a machine-readable ``code`` next to the
human-readable message so UI layers can decide how to notify the user.
"""

from gettext import gettext as _


class AnnotationError(Exception):
    """Base class for annotation errors."""

    default_code: str = "ANNOTATION_ERROR"

    def __init__(self, message: str = "", code: str = ""):
        self.message = message
        self.code = code or self.default_code
        super().__init__(message)

    def to_error_dict(self):
        """Structured payload for events and logs."""
        return {
            "category": type(self).__name__,
            "code": self.code,
            "message": self.message,
        }


class InsufficientPoints(AnnotationError, ValueError):
    """A polygon commit was attempted with fewer than the minimum points."""

    default_code = "INSUFFICIENT_POINTS"

    def __init__(self, num_points: int, min_points: int):
        self.num_points = num_points
        self.min_points = min_points
        super().__init__(
            _("Polygon must have at least {min_points} points (got {num_points})").format(
                min_points=min_points, num_points=num_points
            )
        )


class StorageParseError(AnnotationError, ValueError):
    """Persisted data could not be parsed. Never leaves the persistence layer."""

    default_code = "STORAGE_PARSE_FAILED"

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(
            _('Failed to parse stored "{key}": {reason}').format(key=key, reason=reason)
        )


class InvalidSelectionTransition(AnnotationError, RuntimeError):
    """A selection command was issued from a state that does not allow it."""

    default_code = "INVALID_SELECTION_TRANSITION"


class UnknownEditField(AnnotationError, KeyError):
    """An edit targeted a marker field that is not editable."""

    default_code = "UNKNOWN_EDIT_FIELD"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(
            _('Marker field "{field}" cannot be edited').format(field=field_name)
        )

    def __str__(self):
        return self.message
