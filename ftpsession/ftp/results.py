"""Result types for multi-file FTP session operations."""

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class DirectoryDownloadResult:
    """Outcome of downloading the files of one remote directory."""
    remote_dir: str
    local_dir: str
    downloaded: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failed: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if every plain file was downloaded."""
        return not self.failed

    @property
    def failed_paths(self) -> List[str]:
        """Remote paths whose download failed."""
        return [path for path, _ in self.failed]

    def summary(self) -> dict:
        """
        Get summary statistics for the directory download.

        Returns:
            Dictionary with summary statistics
        """
        return {
            "remote_dir": self.remote_dir,
            "local_dir": self.local_dir,
            "downloaded": len(self.downloaded),
            "skipped": len(self.skipped),
            "failed": len(self.failed),
            "failures": list(self.failed),
        }
