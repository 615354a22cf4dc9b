"""
The catalog of browsers that specifications are matched against.

A :class:`Catalog` starts empty. It is loaded once, from the service or
from a shrinkwrap snapshot, and may then be extended with records read
from files. This module also keeps a default catalog for code that
does not need more than one; the module-level functions operate on it.
"""
import concurrent.futures
import json
import logging
import os
import threading

from . import shrinkwrap
from .capabilities import BrowserRecord
from .exceptions import LoadError
from .matcher import match
from .normalize import LatestIndex, Normalizer
from .remote import SauceLabs

logger = logging.getLogger(__name__)

__all__ = ["Catalog", "default_catalog", "initialize",
           "initialize_in_background", "use_service_sync", "use_shrinkwrap",
           "add_normalized_browsers_from_file", "filter", "get", "forget"]


class Catalog(object):

    def __init__(self, fetcher=None):
        """
        :param fetcher: A callable that returns the raw listing. Defaults
                        to fetching from Sauce Labs.
        """
        self.fetcher = fetcher if fetcher is not None else SauceLabs()
        self._lock = threading.Lock()
        # The records and the latest-version index built with them. Always
        # replaced as a whole.
        self._state = ([], LatestIndex())
        self._have_cached = False

    @property
    def records(self):
        return self._state[0]

    @property
    def latest(self):
        return self._state[1]

    @property
    def have_cached(self):
        return self._have_cached

    def __len__(self):
        return len(self._state[0])

    def __iter__(self):
        return iter(self._state[0])

    def _replace(self, data, source):
        if not isinstance(data, list):
            raise LoadError("the listing from {0} is not an array"
                            .format(source))

        latest = LatestIndex()
        records = Normalizer(latest).normalize(data)

        # Only swapped once normalization has succeeded.
        self._state = (records, latest)
        self._have_cached = True
        logger.info("loaded %d browsers from %s", len(records), source)

    def load_raw(self, data, source="raw data"):
        """
        Replace the contents of the catalog with the normalized version
        of a raw listing.

        :param data: The raw listing.
        :param source: A description of where the data comes from, for
                       logging and error messages.
        :raises saucebrowsers.exceptions.LoadError: If ``data`` is not a
                list.
        :raises saucebrowsers.exceptions.NormalizationError: If an entry
                cannot be normalized.
        """
        with self._lock:
            self._replace(data, source)

    def initialize(self):
        """
        Load the catalog from the fetcher, unless the catalog has already
        been loaded, in which case this is a no-op. Concurrent calls are
        serialized: only the first one fetches.
        """
        with self._lock:
            if self._have_cached:
                return

            self._replace(self.fetcher(), "the service")

    def initialize_in_background(self, executor=None):
        """
        Run :meth:`initialize` in another thread.

        :param executor: The executor to use. A single-use thread pool is
                         created if none is given.
        :type executor: :class:`concurrent.futures.Executor`
        :returns: A future that resolves to ``None`` once the catalog is
                  loaded, or carries the exception that prevented it.
        :rtype: :class:`concurrent.futures.Future`
        """
        if executor is not None:
            return executor.submit(self.initialize)

        executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
        try:
            return executor.submit(self.initialize)
        finally:
            executor.shutdown(wait=False)

    def use_service_sync(self):
        """
        Load the catalog from the fetcher, even if it was loaded before.
        """
        with self._lock:
            self._replace(self.fetcher(), "the service")

    def use_shrinkwrap(self, path=None):
        """
        Load the catalog from a shrinkwrap snapshot instead of the
        service.

        :param path: The path of the snapshot. See
                     :func:`saucebrowsers.shrinkwrap.read`.
        """
        data = shrinkwrap.read(path)
        with self._lock:
            self._replace(data, shrinkwrap.resolve_path(path))

    def write_shrinkwrap(self, path=None):
        """
        Fetch the raw listing and save it as a shrinkwrap snapshot. The
        catalog itself is not modified.

        :returns: The path written to.
        """
        return shrinkwrap.write(self.fetcher(), path)

    def add_normalized_browsers_from_file(self, path):
        """
        Append to the catalog the records stored in a file. The file must
        contain a JSON array of objects shaped like
        :class:`.BrowserRecord`. Records are appended as-is, without
        sorting.

        This modifies the catalog in place and is not synchronized with
        :meth:`get`.

        :param path: The path of the file.
        :raises saucebrowsers.exceptions.LoadError: If the file cannot be
                read, or does not contain an array of records. The
                catalog is then left unchanged.
        """
        path = os.path.abspath(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as ex:
            raise LoadError("could not read file for additional "
                            "devices/browsers at: " + path) from ex

        if not isinstance(data, list):
            raise LoadError("the file for additional devices/browsers at {0} "
                            "does not contain an array".format(path))

        try:
            records = [BrowserRecord.from_dict(item) for item in data]
        except ValueError as ex:
            raise LoadError("invalid record in {0}: {1}".format(path, ex)) \
                from ex

        self._state[0].extend(records)
        logger.info("added %d browsers from %s", len(records), path)

    def filter(self, predicate):
        records, _ = self._state
        return [record for record in records if predicate(record)]

    def get(self, spec, wrapped=False):
        """
        Return the capabilities or records that match ``spec``. See
        :func:`saucebrowsers.matcher.match`.
        """
        records, latest = self._state
        return match(spec, records, latest, wrapped)

    def forget(self):
        """
        Empty the catalog and reset it to its unloaded state.
        """
        with self._lock:
            self._state = ([], LatestIndex())
            self._have_cached = False


default_catalog = Catalog()


def initialize():
    default_catalog.initialize()


def initialize_in_background(executor=None):
    return default_catalog.initialize_in_background(executor)


def use_service_sync():
    default_catalog.use_service_sync()


def use_shrinkwrap(path=None):
    default_catalog.use_shrinkwrap(path)


def add_normalized_browsers_from_file(path):
    default_catalog.add_normalized_browsers_from_file(path)


def filter(predicate):
    # pylint: disable=redefined-builtin
    return default_catalog.filter(predicate)


def get(spec, wrapped=False):
    return default_catalog.get(spec, wrapped)


def forget():
    default_catalog.forget()
