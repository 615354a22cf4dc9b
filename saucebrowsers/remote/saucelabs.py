import http.client
import json
import logging
import os
from urllib.parse import urlsplit

from .base import Remote
from ..exceptions import LoadError

logger = logging.getLogger(__name__)

SAUCE_HOST = "saucelabs.com"

# https://saucelabs.com/rest/v1/info/platforms/webdriver has the same
# information but not the resolutions. So we get everything and filter
# down.
SAUCE_LISTING_PATH = "/rest/v1/info/platforms/all?resolutions=true"

SAUCE_URL = "https://" + SAUCE_HOST + SAUCE_LISTING_PATH

PROXY_VARIABLE = "SAUCE_OUTBOUND_PROXY"


def make_connection(host, proxy=None, timeout=None):
    """
    Create a connection to ``host``, through ``proxy`` if one is given.

    :param host: The host to connect to.
    :type host: :class:`str`
    :param proxy: The URL of an HTTP proxy, like
                  ``http://proxy.example.com:3128``.
    :type proxy: :class:`str`
    :returns: A connection that is not yet open.
    :rtype: :class:`http.client.HTTPSConnection`
    """
    if not proxy:
        return http.client.HTTPSConnection(host, timeout=timeout)

    parts = urlsplit(proxy if "//" in proxy else "//" + proxy)
    conn = http.client.HTTPSConnection(parts.hostname, parts.port or 80,
                                       timeout=timeout)
    conn.set_tunnel(host)
    return conn


def fetch_listing(proxy=None, timeout=None):
    """
    Fetch the platform listing from Sauce Labs.

    :param proxy: The URL of an HTTP proxy to go through.
    :param timeout: A timeout in seconds for the connection.
    :returns: The decoded listing.
    :raises saucebrowsers.exceptions.LoadError: When the listing cannot
            be fetched or is not valid JSON.
    """
    conn = make_connection(SAUCE_HOST, proxy, timeout)
    try:
        conn.request("GET", SAUCE_LISTING_PATH,
                     headers={"Accept": "application/json"})
        resp = conn.getresponse()
        body = resp.read()
    except (OSError, http.client.HTTPException) as ex:
        raise LoadError("could not fetch saucelabs browsers from {0}: {1}"
                        .format(SAUCE_URL, ex)) from ex
    finally:
        conn.close()

    if resp.status != 200:
        raise LoadError("could not fetch saucelabs browsers from {0}: "
                        "got response {1}".format(SAUCE_URL, resp.status))

    try:
        data = json.loads(body.decode("utf-8"))
    except ValueError as ex:
        raise LoadError("could not decode saucelabs browsers from {0}"
                        .format(SAUCE_URL)) from ex

    logger.info("fetched the platform listing from %s", SAUCE_URL)
    return data


class SauceLabs(Remote):
    name = "saucelabs"

    def __init__(self, conf=None, timeout=None):
        super(SauceLabs, self).__init__(
            conf if conf is not None else os.environ)
        self.timeout = timeout

    @property
    def proxy(self):
        return self.conf.get(PROXY_VARIABLE)

    def fetch_listing(self):
        return fetch_listing(self.proxy, self.timeout)
