"""Pytest configuration and shared fixtures for ftpsession tests."""

import pytest
from pathlib import Path
from unittest.mock import MagicMock, patch

from ftpsession.ftp.session import FTPSession


# Test constants
TEST_FTP_HOST = "127.0.0.1"
TEST_FTP_PORT = 2121
TEST_FTP_USER = "testuser"
TEST_FTP_PASS = "testpass"


@pytest.fixture
def mock_ftp():
    """Patch ftplib.FTP inside the session module and return the instance."""
    with patch("ftpsession.ftp.session.FTP") as mock_ftp_class:
        ftp = MagicMock()
        ftp.pwd.return_value = "/"
        mock_ftp_class.return_value = ftp
        yield ftp


@pytest.fixture
def session() -> FTPSession:
    """Provide an unconnected session."""
    return FTPSession(TEST_FTP_HOST, TEST_FTP_USER, TEST_FTP_PASS, port=TEST_FTP_PORT)


@pytest.fixture
def connected_session(session: FTPSession, mock_ftp: MagicMock) -> FTPSession:
    """Provide a session connected to the mocked FTP object."""
    session.connect()
    return session


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Create a small binary file for upload tests."""
    local_file = tmp_path / "sample.bin"
    local_file.write_bytes(b"\x00\x01\x02binary\r\ndata\xff")
    return local_file
