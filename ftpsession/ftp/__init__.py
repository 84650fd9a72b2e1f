"""FTP operations module for ftpsession.

This module handles all FTP-related functionality:
- FTPSession: Connection lifecycle, transfers and directory operations
- DirectoryDownloadResult: Outcome of a directory download
- Exceptions: FTP-specific error types
"""
