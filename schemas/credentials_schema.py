from __future__ import annotations

from schemas.primitives import EmailAddress, EntitySchema, secret_text

MIN_SECRET_LENGTH = 8
MAX_SECRET_LENGTH = 128

Secret = secret_text(MIN_SECRET_LENGTH, MAX_SECRET_LENGTH)


class LoginCredentials(EntitySchema):
    # The secret is masked by repr() and by JSON serialization.
    id: EmailAddress
    secret: Secret
