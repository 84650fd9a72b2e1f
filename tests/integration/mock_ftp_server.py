"""Mock FTP server for integration testing.

Uses pyftpdlib to run a local FTP server over a temporary directory,
with hooks to make individual RETR or DELE commands fail.
"""

import os
import tempfile
import threading
import time
from pathlib import Path
from typing import Optional, Set

from pyftpdlib.authorizers import DummyAuthorizer
from pyftpdlib.handlers import FTPHandler
from pyftpdlib.servers import FTPServer


class FaultyFTPHandler(FTPHandler):
    """FTPHandler that rejects RETR/DELE for selected file names."""

    fail_retr: Set[str] = set()
    fail_dele: Set[str] = set()

    def ftp_RETR(self, file):
        if os.path.basename(file) in self.fail_retr:
            self.respond("550 Simulated transfer failure.")
            return
        return super().ftp_RETR(file)

    def ftp_DELE(self, path):
        if os.path.basename(path) in self.fail_dele:
            self.respond("550 Simulated delete failure.")
            return
        return super().ftp_DELE(path)


class MockFTPServer:
    """
    Local FTP server with a small prepared file tree.

    Layout:
        /pub/a.txt, /pub/b.bin, /pub/sub/c.txt
        /upload/            (empty)
        /trash/x, /trash/y, /trash/z

    Usage:
        with MockFTPServer() as server:
            # Connect to server.host:server.port
            # server.root_dir contains the mock filesystem
            pass
    """

    DEFAULT_USER = "testuser"
    DEFAULT_PASS = "testpass"

    def __init__(
        self,
        port: int = 0,
        username: str = DEFAULT_USER,
        password: str = DEFAULT_PASS,
    ):
        """
        Initialize the mock FTP server.

        Args:
            port: Port to listen on (0 picks a free port)
            username: FTP username
            password: FTP password
        """
        self._requested_port = port
        self.username = username
        self.password = password

        self._server: Optional[FTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._temp_dir: Optional[tempfile.TemporaryDirectory] = None
        self._root_dir: Optional[Path] = None
        self._handler = type("TestFTPHandler", (FaultyFTPHandler,), {
            "fail_retr": set(),
            "fail_dele": set(),
        })

    @property
    def root_dir(self) -> Path:
        """Root directory of the mock filesystem."""
        if self._root_dir is None:
            raise RuntimeError("Server not started")
        return self._root_dir

    @property
    def host(self) -> str:
        """Server host address."""
        return "127.0.0.1"

    @property
    def port(self) -> int:
        """Port the server is listening on."""
        if self._server is None:
            return self._requested_port
        return self._server.address[1]

    def fail_download(self, file_name: str) -> None:
        """Make RETR of any file with this name fail."""
        self._handler.fail_retr.add(file_name)

    def fail_delete(self, file_name: str) -> None:
        """Make DELE of any file with this name fail."""
        self._handler.fail_dele.add(file_name)

    def _create_structure(self) -> None:
        root = self._root_dir

        pub = root / "pub"
        (pub / "sub").mkdir(parents=True)
        (pub / "a.txt").write_bytes(b"alpha\r\n")
        (pub / "b.bin").write_bytes(bytes(range(256)))
        (pub / "sub" / "c.txt").write_bytes(b"nested")

        (root / "upload").mkdir()

        trash = root / "trash"
        trash.mkdir()
        for name in ("x", "y", "z"):
            (trash / name).write_bytes(name.encode())

    def start(self) -> None:
        """Start the FTP server in a background thread."""
        self._temp_dir = tempfile.TemporaryDirectory(prefix="mock_ftp_")
        self._root_dir = Path(self._temp_dir.name)

        self._create_structure()

        authorizer = DummyAuthorizer()
        authorizer.add_user(
            self.username,
            self.password,
            str(self._root_dir),
            perm="elradfmw"  # Full permissions
        )

        handler = self._handler
        handler.authorizer = authorizer
        handler.passive_ports = range(60000, 60100)

        self._server = FTPServer((self.host, self._requested_port), handler)

        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

        # Give server time to start
        time.sleep(0.2)

    def stop(self) -> None:
        """Stop the FTP server and clean up."""
        if self._server:
            self._server.close_all()

        if self._temp_dir:
            self._temp_dir.cleanup()

        self._server = None
        self._thread = None
        self._temp_dir = None
        self._root_dir = None

    def __enter__(self) -> "MockFTPServer":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()
