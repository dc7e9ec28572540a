"""qrdeck: saved URLs shown one at a time as scannable QR codes."""

__version__ = "0.1.0"


def get_active_url(storage_path=None) -> str:
    """Return the active saved URL, for scripts and notebooks.

    Args:
        storage_path: Storage file to read. Defaults to the configured path
            (``QRDECK_STORAGE`` or the per-user data directory).

    Returns:
        The active record's URL.

    Raises:
        LookupError: If no URLs are saved.

    Example::

        from qrdeck import get_active_url

        url = get_active_url()
    """
    from pathlib import Path

    from .config import get_storage_path
    from .storage import LocalStorage
    from .urls import UrlStore

    path = Path(storage_path) if storage_path is not None else get_storage_path()
    active = UrlStore.open(LocalStorage(path)).get_active()
    if active is None:
        raise LookupError(f"No saved URLs in {path}.")
    return active.url
