import os

from .exceptions import DirectoryError, WriteError


DIRECTORY_MODE = 0o775


def _makedirs(path, mode):
    # os.makedirs only applies mode to the last component
    current = ''
    for part in path.split(os.sep):
        current = os.path.join(current, part)
        os.makedirs(current, mode, exist_ok=True)


def materialize(body, relative_path, mode):
    """Write ``body`` to ``relative_path`` under the current directory with exactly ``mode``."""
    normalized = os.path.normpath(relative_path)
    if os.path.isabs(normalized) or normalized == os.pardir or normalized.startswith(os.pardir + os.sep):
        raise WriteError(relative_path, 'path is outside the configuration root')

    parent = os.path.dirname(normalized)
    if parent:
        try:
            _makedirs(parent, DIRECTORY_MODE)
        except OSError as e:
            raise DirectoryError(parent, f'unable to create directory: {e}') from e

    try:
        fd = os.open(normalized, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
        with os.fdopen(fd, 'wb') as f:
            # umask and any previous mode of the file must not leak through
            os.fchmod(f.fileno(), mode)
            f.write(body)
    except OSError as e:
        raise WriteError(relative_path, f'unable to write file: {e}') from e
