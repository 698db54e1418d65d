"""Authentication strategies.

Every provider is a ``requests`` auth object, so it can be attached to a
session or passed per request:

    session.auth = BearerTokenAuth("squ_xxx")
    session.auth = BasicAuth("squ_xxx")          # token as username, empty password
    session.auth = PasscodeAuth("system-passcode")
"""

from requests.auth import AuthBase, HTTPBasicAuth


class BearerTokenAuth(AuthBase):
    """``Authorization: Bearer <token>`` (user tokens, SonarCloud)."""

    auth_type = "bearer"

    def __init__(self, token: str) -> None:
        if not token:
            raise ValueError("Token is required for Bearer authentication")
        self.token = token

    def __call__(self, r):
        r.headers["Authorization"] = f"Bearer {self.token}"
        return r


class BasicAuth(HTTPBasicAuth):
    """HTTP Basic credentials.

    SonarQube also accepts a user token as the username with an empty
    password, which is what ``BasicAuth(token)`` sends.
    """

    auth_type = "basic"

    def __init__(self, username: str, password: str = "") -> None:
        if not username:
            raise ValueError("Username is required for Basic authentication")
        super().__init__(username, password)


class PasscodeAuth(AuthBase):
    """``X-Sonar-Passcode`` header used by system endpoints such as health."""

    auth_type = "passcode"

    def __init__(self, passcode: str) -> None:
        if not passcode:
            raise ValueError("Passcode is required for Passcode authentication")
        self.passcode = passcode

    def __call__(self, r):
        r.headers["X-Sonar-Passcode"] = self.passcode
        return r


class NoAuth(AuthBase):
    """Anonymous access to public endpoints."""

    auth_type = "none"

    def __call__(self, r):
        return r
