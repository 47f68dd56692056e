"""Backend-issued bearer tokens."""

import secrets


class TokenRegistry:
    """Maps opaque bearer tokens to user ids for the lifetime of the process."""

    def __init__(self) -> None:
        self._tokens: dict[str, str] = {}

    def issue(self, user_id: str) -> str:
        token = secrets.token_urlsafe(32)
        self._tokens[token] = user_id
        return token

    def resolve(self, token: str) -> str | None:
        return self._tokens.get(token)

    def revoke(self, token: str) -> None:
        self._tokens.pop(token, None)

    def __len__(self) -> int:
        return len(self._tokens)
