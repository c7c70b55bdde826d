"""Session identity for working directories."""

import hashlib


def compute_session_id(path: str) -> str:
    """Derive a stable identifier for a working directory.

    The same path text always yields the same 32-char uppercase hex digest.
    Correlation token only, not a security credential.

    Args:
        path: Working directory path as typed by the user

    Returns:
        Uppercase hexadecimal MD5 digest of the path
    """
    return hashlib.md5(path.encode("utf-8"), usedforsecurity=False).hexdigest().upper()


def index_name_for(session_id: str) -> str:
    """Vector index name owned by a session."""
    return f"doctalk_{session_id.lower()}"
