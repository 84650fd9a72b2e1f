"""Keyring storage for FTP session passwords.

Passwords are stored under the ``ftpsession`` service, one entry per
``host:username`` pair. ``FTPSession.from_keyring`` reads them back so a
caller can open a session without handling the password itself.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError


class CredentialManager:
    """Look up and store FTP passwords in the system keyring.

    Backend failures are reported as False/None rather than raised, so a
    missing or locked keyring looks the same as a missing entry to
    ``FTPSession.from_keyring``.
    """

    SERVICE_NAME = "ftpsession"

    def _make_key(self, host: str, username: str) -> str:
        return f"{host}:{username}"

    def save_password(self, host: str, username: str, password: str) -> bool:
        """
        Store the password a session for host/username should log in with.

        An existing entry for the same pair is replaced.

        Returns:
            True if the keyring accepted the password, False otherwise
        """
        try:
            keyring.set_password(self.SERVICE_NAME, self._make_key(host, username), password)
            return True
        except KeyringError:
            return False

    def get_password(self, host: str, username: str) -> Optional[str]:
        """
        Password stored for host/username, or None.

        None covers both "nothing stored" and "keyring unavailable".
        """
        try:
            return keyring.get_password(self.SERVICE_NAME, self._make_key(host, username))
        except KeyringError:
            return None

    def delete_password(self, host: str, username: str) -> bool:
        """Forget the password for host/username. False if nothing was removed."""
        try:
            keyring.delete_password(self.SERVICE_NAME, self._make_key(host, username))
            return True
        except KeyringError:
            return False

    def has_password(self, host: str, username: str) -> bool:
        return self.get_password(host, username) is not None
