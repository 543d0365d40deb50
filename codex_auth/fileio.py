"""Owner-only file writes for credential material"""

import os
import platform
import tempfile
from pathlib import Path

from .errors import CredentialIOError


def write_private_file(path: Path, content: str) -> None:
    """Atomically replace ``path`` with ``content``, readable by the owner only

    The data goes to a temporary file in the same directory, which is
    then renamed over the destination. Readers see either the old file
    or the complete new one.

    Raises:
        CredentialIOError: If any step fails
    """
    # mkstemp creates the file 0600, so no wider mode is ever visible
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
        os.replace(tmp_name, path)
        if platform.system() != "Windows":
            os.chmod(path, 0o600)
    except OSError as e:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise CredentialIOError(f"Failed to write {path}") from e


def ensure_directory(path: Path) -> None:
    """Create ``path`` and its parents if missing

    Raises:
        CredentialIOError: If the directory cannot be created
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CredentialIOError(f"Failed to create directory: {path}") from e
