"""FTP session exceptions for ftpsession.

Each failure kind of a session operation has its own exception class so
callers can catch the kind they care about instead of parsing messages.
"""


class FTPError(Exception):
    """Base exception for all FTP session errors."""

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class FTPConnectionError(FTPError):
    """Failed to reach the FTP server."""

    def __init__(self, host: str, port: int, original_error: Exception = None):
        self.host = host
        self.port = port
        message = f"Failed to connect to {host}:{port}"
        super().__init__(message, original_error)


class FTPAuthenticationError(FTPError):
    """FTP authentication (login) failed."""

    def __init__(self, username: str, original_error: Exception = None):
        self.username = username
        message = f"Authentication failed for user '{username}'"
        super().__init__(message, original_error)


class FTPNotConnectedError(FTPError):
    """Operation attempted without active FTP connection."""

    def __init__(self, operation: str = "Operation"):
        self.operation = operation
        message = f"{operation} requires an active FTP connection"
        super().__init__(message)


class FTPSessionClosedError(FTPNotConnectedError):
    """Operation attempted on a session that has already been closed."""

    def __init__(self, operation: str = "Operation"):
        self.operation = operation
        message = f"{operation} is not possible on a closed FTP session"
        FTPError.__init__(self, message)


class FTPTransferError(FTPError):
    """Failed to upload or download a file."""

    def __init__(
        self,
        direction: str,
        remote_path: str,
        local_path: str,
        original_error: Exception = None
    ):
        self.direction = direction
        self.remote_path = remote_path
        self.local_path = local_path
        if direction == "upload":
            message = f"Failed to upload '{local_path}' to '{remote_path}'"
        else:
            message = f"Failed to download '{remote_path}' to '{local_path}'"
        super().__init__(message, original_error)


class FTPListingError(FTPError):
    """Failed to list (or probe) a remote directory."""

    def __init__(self, path: str, original_error: Exception = None):
        self.path = path
        message = f"Could not list files in directory '{path}'"
        super().__init__(message, original_error)


class FTPDeletionError(FTPError):
    """Failed to delete a remote file."""

    def __init__(self, path: str, original_error: Exception = None):
        self.path = path
        message = f"Could not delete file '{path}'"
        super().__init__(message, original_error)
