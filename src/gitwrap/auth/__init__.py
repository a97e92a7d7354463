"""GitHub OAuth2 token acquisition."""

from .oauth import TokenAcquirer, build_authorization_url, exchange_code_for_token, extract_code

__all__ = [
    "TokenAcquirer",
    "build_authorization_url",
    "exchange_code_for_token",
    "extract_code",
]
