# ski_scheduler/shared/utils/input_validation.py

from typing import Any, Dict, Sequence

from ski_scheduler.domain.exceptions import ValidationException


class InputValidator:
    """
    Validation of user input beyond what pydantic already enforces.
    """

    MAX_USERNAME_LENGTH = 100
    MAX_PASSWORD_BYTES = 72  # bcrypt ignores anything past 72 bytes

    @staticmethod
    def require(fields: Dict[str, Any]) -> None:
        """
        Fail on the first field that is missing.

        ``None`` and blank strings count as missing; ``False`` and ``0``
        are real values.

        Raises:
            ValidationException: "<Field> required"
        """
        for name, value in fields.items():
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationException(f"{name} required")

    @classmethod
    def validate_username(cls, username: str) -> None:
        if len(username) > cls.MAX_USERNAME_LENGTH:
            raise ValidationException(
                f"Username is too long (maximum {cls.MAX_USERNAME_LENGTH} characters)"
            )

    @classmethod
    def validate_password(cls, password: str) -> None:
        if len(password.encode("utf-8")) > cls.MAX_PASSWORD_BYTES:
            raise ValidationException(
                f"Password is too long (maximum {cls.MAX_PASSWORD_BYTES} bytes)"
            )

    @staticmethod
    def require_positive(name: str, value: int) -> None:
        if value < 1:
            raise ValidationException(f"{name} must be at least 1")

    @staticmethod
    def field_labels(names: Sequence[str]) -> Dict[str, str]:
        """Map attribute names to the labels used in messages ("time_length" -> "TimeLength")."""
        return {name: "".join(part.capitalize() for part in name.split("_")) for name in names}
