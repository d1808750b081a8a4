"""Provider credentials supplied by callers."""

from dataclasses import dataclass, field

from coach.core.exceptions import ValidationError

ENVIRONMENTS = ("sandbox", "production")


@dataclass(frozen=True)
class ProviderCredentials:
    """
    Secret pair for the banking data provider.

    Passed through to the provider as-is; only their shape is checked here.
    """

    secret_id: str
    secret_key: str = field(repr=False)
    environment: str = "sandbox"

    def validate(self) -> None:
        """Raise ValidationError unless both secrets and the environment are usable."""
        if not self.secret_id or not self.secret_id.strip():
            raise ValidationError("secret_id is required")
        if not self.secret_key or not self.secret_key.strip():
            raise ValidationError("secret_key is required")
        if self.environment not in ENVIRONMENTS:
            raise ValidationError(
                f"environment must be one of {', '.join(ENVIRONMENTS)}, got {self.environment!r}"
            )
