from pydantic import SecretStr

from wash.domain.shared.model.value import ValueObject


class Anonymous(ValueObject):
    """No credentials are sent to the registry."""

    def __str__(self) -> str:
        return "anonymous"


class BasicAuth(ValueObject):
    """Username/password credentials for the registry."""

    username: str
    password: SecretStr

    def __str__(self) -> str:
        return f"basic ({self.username})"


Credentials = Anonymous | BasicAuth


def resolve_credentials(user: str | None, password: str | SecretStr | None) -> Credentials:
    """Basic auth only when both halves are present, anonymous otherwise."""
    if user is not None and password is not None:
        if isinstance(password, str):
            password = SecretStr(password)
        return BasicAuth(username=user, password=password)
    return Anonymous()
