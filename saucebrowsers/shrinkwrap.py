"""
Reading and writing of shrinkwrap snapshots: copies of the raw Sauce
Labs listing kept on disk so that a test suite does not depend on the
service being reachable.
"""
import json
import logging
import os

from .exceptions import LoadError

logger = logging.getLogger(__name__)

DEFAULT_SHRINKWRAP = "guacamole-shrinkwrap.json"


def resolve_path(path=None):
    return os.path.abspath(path or DEFAULT_SHRINKWRAP)


def read(path=None):
    """
    Read a snapshot.

    :param path: The path of the snapshot. Defaults to
                 :data:`DEFAULT_SHRINKWRAP` in the current directory.
    :returns: The raw listing.
    :raises saucebrowsers.exceptions.LoadError: If the file cannot be
            read or is not valid JSON.
    """
    path = resolve_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as ex:
        raise LoadError("could not read shrinkwrap file at: " + path) from ex

    logger.info("read shrinkwrap file at %s", path)
    return data


def write(data, path=None):
    """
    Write a snapshot.

    :param data: The raw listing.
    :param path: The path of the snapshot. Defaults to
                 :data:`DEFAULT_SHRINKWRAP` in the current directory.
    :returns: The absolute path written to.
    """
    path = resolve_path(path)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, sort_keys=True)
            f.write("\n")
    except OSError as ex:
        raise LoadError("could not write shrinkwrap file at: " + path) \
            from ex

    logger.info("wrote shrinkwrap file at %s", path)
    return path
