"""FTP session management for ftpsession.

Provides SessionState enum, SessionConfig dataclass, and the FTPSession
class that wraps a single ftplib connection.
"""

import posixpath
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from ftplib import FTP, all_errors, error_perm
from pathlib import Path
from typing import List, Optional, Union

from ftpsession.config.credentials import CredentialManager
from ftpsession.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPDeletionError,
    FTPListingError,
    FTPNotConnectedError,
    FTPSessionClosedError,
    FTPTransferError,
)
from ftpsession.ftp.results import DirectoryDownloadResult
from ftpsession.utils.logging import get_logger
from ftpsession.utils.validators import validate_host, validate_port

logger = get_logger("ftpsession.session")

DEFAULT_PORT = 21

# Socket timeout handed to ftplib, in seconds
DEFAULT_TIMEOUT = 30

# Mode for local directories created by download_directory (umask applies)
LOCAL_DIR_MODE = 0o777


class SessionState(Enum):
    """FTP session state."""
    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    CLOSED = "closed"


@dataclass
class SessionConfig:
    """FTP connection parameters. The password is kept out on purpose."""
    host: str
    port: int = DEFAULT_PORT
    username: str = "anonymous"

    def __post_init__(self):
        """Validate configuration after initialization."""
        valid, error = validate_host(self.host)
        if not valid:
            raise ValueError(error)
        valid, error = validate_port(self.port)
        if not valid:
            raise ValueError(error)


LocalPath = Union[str, Path]


class FTPSession:
    """
    A single FTP connection and the file operations run over it.

    The session moves through UNINITIALIZED -> CONNECTED -> CLOSED. Every
    operation other than connect() and close() needs the CONNECTED state
    and raises FTPNotConnectedError otherwise. A closed session cannot be
    reconnected; create a new one instead.

    Usage:
        with FTPSession("ftp.example.com", "user", "secret") as session:
            session.upload_file("/incoming/report.csv", "report.csv")
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        port: int = DEFAULT_PORT
    ):
        """
        Initialize the session. No network traffic happens here.

        Args:
            host: FTP server hostname or IP address
            username: FTP username
            password: FTP password
            port: FTP control port

        Raises:
            ValueError: If host or port is invalid
        """
        self._config = SessionConfig(host=host, port=port, username=username)
        self._password = password
        self._ftp: Optional[FTP] = None
        self._state = SessionState.UNINITIALIZED
        self._connected_at: Optional[datetime] = None
        self._last_activity: Optional[datetime] = None

    @classmethod
    def from_keyring(
        cls,
        host: str,
        username: str,
        port: int = DEFAULT_PORT,
        credentials: Optional[CredentialManager] = None
    ) -> "FTPSession":
        """
        Create a session using a password saved in the system keyring.

        Args:
            host: FTP server hostname or IP address
            username: FTP username
            port: FTP control port
            credentials: Credential store (defaults to CredentialManager())

        Returns:
            Unconnected FTPSession

        Raises:
            FTPAuthenticationError: If no password is saved for host/username
        """
        credentials = credentials or CredentialManager()
        password = credentials.get_password(host, username)
        if password is None:
            logger.warning(f"No saved password for {username}@{host}")
            raise FTPAuthenticationError(username)
        return cls(host, username, password, port=port)

    def __repr__(self) -> str:
        return (
            f"FTPSession(host={self._config.host!r}, port={self._config.port}, "
            f"username={self._config.username!r}, state={self._state.value})"
        )

    def __enter__(self) -> "FTPSession":
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def state(self) -> SessionState:
        """Current session state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """True if currently connected."""
        return self._state == SessionState.CONNECTED

    @property
    def config(self) -> SessionConfig:
        """Connection parameters (without the password)."""
        return self._config

    @property
    def connected_at(self) -> Optional[datetime]:
        """Timestamp when connection was established."""
        return self._connected_at

    @property
    def last_activity(self) -> Optional[datetime]:
        """Timestamp of last successful operation."""
        return self._last_activity

    @property
    def ftp(self) -> FTP:
        """
        Get the underlying FTP object.

        Raises:
            FTPNotConnectedError: If not connected
        """
        return self._require_connection("FTP access")

    def _require_connection(self, operation: str) -> FTP:
        if self._state == SessionState.CLOSED:
            raise FTPSessionClosedError(operation)
        if self._state != SessionState.CONNECTED or self._ftp is None:
            raise FTPNotConnectedError(operation)
        return self._ftp

    def _update_activity(self) -> None:
        """Update last activity timestamp."""
        self._last_activity = datetime.now()

    # Connection lifecycle

    def connect(self) -> FTP:
        """
        Connect, log in and switch to passive mode.

        Calling connect() on a connected session returns the existing
        handle. A failed attempt leaves the session UNINITIALIZED.

        Returns:
            The underlying FTP object

        Raises:
            FTPConnectionError: If the server cannot be reached
            FTPAuthenticationError: If login is rejected
            FTPSessionClosedError: If the session was already closed
        """
        if self._state == SessionState.CLOSED:
            raise FTPSessionClosedError("Connect")
        if self._state == SessionState.CONNECTED:
            return self._ftp

        config = self._config
        logger.info(f"Connecting to {config.host}:{config.port} as '{config.username}'")

        ftp = FTP()
        try:
            ftp.connect(host=config.host, port=config.port, timeout=DEFAULT_TIMEOUT)
        except all_errors as e:
            self._discard(ftp)
            logger.error(f"Connection to {config.host}:{config.port} failed: {e}")
            raise FTPConnectionError(config.host, config.port, e)

        try:
            ftp.login(user=config.username, passwd=self._password)
        except error_perm as e:
            self._discard(ftp)
            logger.error(f"Login rejected for '{config.username}': {e}")
            raise FTPAuthenticationError(config.username, e)
        except all_errors as e:
            self._discard(ftp)
            logger.error(f"Connection lost during login: {e}")
            raise FTPConnectionError(config.host, config.port, e)

        ftp.set_pasv(True)

        self._ftp = ftp
        self._state = SessionState.CONNECTED
        self._connected_at = datetime.now()
        self._last_activity = self._connected_at
        logger.info(f"Connected to {config.host}:{config.port}")
        return ftp

    def close(self) -> None:
        """Close the connection. Safe to call in any state, any number of times."""
        if self._ftp is not None:
            try:
                self._ftp.quit()
            except Exception:
                # Server already gone
                self._discard(self._ftp)
            logger.info(f"Closed connection to {self._config.host}:{self._config.port}")

        self._ftp = None
        self._state = SessionState.CLOSED
        self._connected_at = None

    @staticmethod
    def _discard(ftp: FTP) -> None:
        """Drop a connection without talking to the server."""
        try:
            ftp.close()
        except Exception:
            pass

    # Transfers

    def upload_file(self, remote_path: str, local_path: LocalPath) -> bool:
        """
        Upload a local file in binary mode.

        Args:
            remote_path: Destination path on the server
            local_path: Local file to upload

        Returns:
            True once the server has accepted the file

        Raises:
            FTPNotConnectedError: If not connected
            FTPTransferError: If the local file cannot be read or STOR fails
        """
        ftp = self._require_connection("Upload")
        local_path = Path(local_path)
        logger.debug(f"Uploading {local_path} to {remote_path}")

        try:
            with open(local_path, "rb") as f:
                ftp.storbinary(f"STOR {remote_path}", f)
        except all_errors as e:
            raise FTPTransferError("upload", remote_path, str(local_path), e)

        self._update_activity()
        return True

    def download_file(self, remote_path: str, local_path: LocalPath) -> bool:
        """
        Download a remote file in binary mode, overwriting local_path.

        A partially written local file is removed when the transfer fails.

        Args:
            remote_path: Source path on the server
            local_path: Local destination file

        Returns:
            True once the file has been written

        Raises:
            FTPNotConnectedError: If not connected
            FTPTransferError: If RETR fails or the local file cannot be written
        """
        ftp = self._require_connection("Download")
        local_path = Path(local_path)
        logger.debug(f"Downloading {remote_path} to {local_path}")

        opened = False
        try:
            with open(local_path, "wb") as f:
                opened = True
                ftp.retrbinary(f"RETR {remote_path}", f.write)
        except all_errors as e:
            if opened:
                self._remove_partial(local_path)
            raise FTPTransferError("download", remote_path, str(local_path), e)

        self._update_activity()
        return True

    @staticmethod
    def _remove_partial(local_path: Path) -> None:
        try:
            local_path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning(f"Could not remove partial download {local_path}: {e}")

    def download_directory(
        self,
        remote_dir: str,
        local_dir: LocalPath
    ) -> DirectoryDownloadResult:
        """
        Download the plain files of a remote directory into local_dir.

        Subdirectories are skipped, not recursed into. A failed file is
        logged and recorded in the result, and the remaining files are
        still downloaded.

        Args:
            remote_dir: Remote directory to download
            local_dir: Local directory, created if missing

        Returns:
            DirectoryDownloadResult listing downloaded, skipped and failed entries

        Raises:
            FTPNotConnectedError: If not connected
            FTPListingError: If remote_dir cannot be listed
            FTPTransferError: If local_dir cannot be created
        """
        self._require_connection("Directory download")
        local_dir = Path(local_dir)
        try:
            local_dir.mkdir(mode=LOCAL_DIR_MODE, parents=True, exist_ok=True)
        except OSError as e:
            raise FTPTransferError("download", remote_dir, str(local_dir), e)

        entries = self.scan_dir(remote_dir)
        result = DirectoryDownloadResult(remote_dir=remote_dir, local_dir=str(local_dir))

        for entry in entries:
            if self._is_directory(entry):
                logger.debug(f"Skipping subdirectory {entry}")
                result.skipped.append(entry)
                continue

            try:
                self.download_file(entry, local_dir / posixpath.basename(entry))
                result.downloaded.append(entry)
            except FTPTransferError as e:
                logger.warning(f"Skipping {entry}: {e}")
                result.failed.append((entry, str(e)))

        logger.info(
            f"Downloaded {len(result.downloaded)} file(s) from {remote_dir} "
            f"to {local_dir} ({len(result.failed)} failed, "
            f"{len(result.skipped)} subdirectories skipped)"
        )
        return result

    # Directory operations

    def scan_dir(self, remote_dir: str) -> List[str]:
        """
        List a remote directory.

        Self and parent entries are dropped. Bare names returned by the
        server are joined onto remote_dir. Server order is kept.

        Args:
            remote_dir: Remote directory to list

        Returns:
            List of remote paths

        Raises:
            FTPNotConnectedError: If not connected
            FTPListingError: If NLST fails
        """
        ftp = self._require_connection("Listing")

        try:
            entries = ftp.nlst(remote_dir)
        except all_errors as e:
            raise FTPListingError(remote_dir, e)

        self._update_activity()
        paths = []
        for entry in entries:
            if posixpath.basename(entry) in (".", ".."):
                continue
            if "/" in entry:
                paths.append(entry)
            else:
                paths.append(posixpath.join(remote_dir, entry))

        logger.debug(f"Found {len(paths)} entries in {remote_dir}")
        return paths

    def delete_file(self, remote_path: str) -> None:
        """
        Delete a single remote file.

        Raises:
            FTPNotConnectedError: If not connected
            FTPDeletionError: If DELE fails
        """
        ftp = self._require_connection("Delete")
        logger.debug(f"Deleting {remote_path}")

        try:
            ftp.delete(remote_path)
        except all_errors as e:
            raise FTPDeletionError(remote_path, e)

        self._update_activity()

    def delete_all_files(self, remote_dir: str) -> List[str]:
        """
        Delete every entry of a remote directory, one at a time.

        The first failure stops the loop and propagates; entries not yet
        reached are left in place.

        Args:
            remote_dir: Remote directory to empty

        Returns:
            Remote paths that were deleted

        Raises:
            FTPNotConnectedError: If not connected
            FTPListingError: If remote_dir cannot be listed
            FTPDeletionError: If any deletion fails
        """
        deleted = []
        for remote_path in self.scan_dir(remote_dir):
            self.delete_file(remote_path)
            deleted.append(remote_path)

        logger.info(f"Deleted {len(deleted)} file(s) from {remote_dir}")
        return deleted

    def _is_directory(self, remote_path: str) -> bool:
        """
        Probe remote_path by changing into it and back again.

        Any failure to change into remote_path means it is not a directory.

        Raises:
            FTPListingError: If the working directory cannot be read or restored
        """
        ftp = self._require_connection("Directory check")

        try:
            current_dir = ftp.pwd()
        except all_errors as e:
            raise FTPListingError(remote_path, e)

        try:
            ftp.cwd(remote_path)
        except all_errors as e:
            logger.debug(f"{remote_path} is not a directory: {e}")
            return False

        try:
            ftp.cwd(current_dir)
        except all_errors as e:
            raise FTPListingError(remote_path, e)

        return True
