"""ftpsession: a small object-oriented wrapper around ftplib.

    from ftpsession import FTPSession

    with FTPSession("ftp.example.com", "user", "secret") as session:
        session.download_directory("/outgoing", "downloads")
"""

from ftpsession.ftp.exceptions import (
    FTPAuthenticationError,
    FTPConnectionError,
    FTPDeletionError,
    FTPError,
    FTPListingError,
    FTPNotConnectedError,
    FTPSessionClosedError,
    FTPTransferError,
)
from ftpsession.ftp.results import DirectoryDownloadResult
from ftpsession.ftp.session import FTPSession, SessionConfig, SessionState
from ftpsession.utils.logging import setup_logging

__all__ = [
    "DirectoryDownloadResult",
    "FTPAuthenticationError",
    "FTPConnectionError",
    "FTPDeletionError",
    "FTPError",
    "FTPListingError",
    "FTPNotConnectedError",
    "FTPSession",
    "FTPSessionClosedError",
    "FTPTransferError",
    "SessionConfig",
    "SessionState",
    "setup_logging",
]
