"""Field-name keywords that suggest a value is a secret."""

from typing import Tuple

HIGH_CONFIDENCE_KEYWORDS: Tuple[str, ...] = (
    "password",
    "passwd",
    "pwd",
    "passphrase",
    "secret",
    "private_key",
    "privatekey",
    "api_key",
    "apikey",
    "api_secret",
    "apisecret",
    "access_token",
    "accesstoken",
    "auth_token",
    "authtoken",
    "bearer_token",
    "client_secret",
    "clientsecret",
)

MEDIUM_CONFIDENCE_KEYWORDS: Tuple[str, ...] = (
    "key",
    "token",
    "auth",
    "credential",
    "cred",
    "authorization",
    "refresh_token",
    "session_key",
    "encryption_key",
    "signature",
)

DOMAIN_KEYWORDS: Tuple[str, ...] = (
    # Database
    "db_password",
    "database_password",
    "mysql_password",
    "postgres_password",
    "connection_string",
    "dsn",
    # Certificates
    "cert",
    "certificate",
    "pem",
    "p12",
    "pfx",
    "keystore",
)

SECRET_KEYWORDS: Tuple[str, ...] = (
    HIGH_CONFIDENCE_KEYWORDS + MEDIUM_CONFIDENCE_KEYWORDS + DOMAIN_KEYWORDS
)


def has_secret_keyword(field_name: str) -> bool:
    """True if ``field_name`` contains any secret-suggestive keyword."""
    if not field_name:
        return False
    lowered = str(field_name).lower()
    return any(keyword in lowered for keyword in SECRET_KEYWORDS)
