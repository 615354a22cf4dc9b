from selenium import webdriver

from .catalog import default_catalog

# Maps upper-cased browser names and their abbreviations to the
# attribute names of selenium's DesiredCapabilities.
_BROWSER_ABBRS = {
    "IE": "INTERNETEXPLORER",
    "INTERNET EXPLORER": "INTERNETEXPLORER",
    "FF": "FIREFOX",
    "CH": "CHROME",
    "MICROSOFTEDGE": "EDGE",
}


def browser_key(browser_name):
    if browser_name is None:
        return None

    browser = str(browser_name).upper()
    return _BROWSER_ABBRS.get(browser, browser)


class Config(object):

    def __init__(self, desired_capabilities, remote=True, id=None,
                 family=None):
        """
        The configuration a test harness uses to start a browser that
        has been resolved from the catalog.

        :param desired_capabilities: The capabilities of the browser, as
                                     returned by
                                     :func:`saucebrowsers.get`.
        :type desired_capabilities: :class:`dict`
        :param remote: Whether the browser runs on Sauce Labs.
        :param id: The id of the record the capabilities come from.
        :param family: The family of the record.
        """
        self.desired_capabilities = dict(desired_capabilities)
        self.remote = remote
        self.id = id
        self.family = family

        self.browser = browser_key(
            self.desired_capabilities.get("browserName"))
        self.platform = self.desired_capabilities.get("platform") or \
            self.desired_capabilities.get("platformName")
        self.version = self.desired_capabilities.get("version") or \
            self.desired_capabilities.get("platformVersion")

    @classmethod
    def from_record(cls, record, remote=True):
        return cls(record["desiredCapabilities"], remote, record.get("id"),
                   record.get("family"))

    def make_selenium_desired_capabilities(self):
        """
        Start from the capabilities selenium uses by default for the
        browser, if it has any, and add the ones of this configuration.
        """
        ret = dict(getattr(webdriver.DesiredCapabilities, self.browser or "",
                           None) or {})
        ret.update(self.desired_capabilities)
        return ret

    def __str__(self):
        return "Selenium configured for " + \
            ", ".join(str(part) for part in
                      (self.id, self.platform, self.browser, self.version,
                       "Remote" if self.remote else "Local"))


def get_config(spec, catalog=None, remote=True):
    """
    Resolve a specification to a single configuration.

    :param spec: The specification. See :func:`saucebrowsers.get`.
    :param catalog: The catalog to search. Defaults to the default
                    catalog.
    :type catalog: :class:`saucebrowsers.catalog.Catalog`
    :returns: The configuration.
    :rtype: :class:`Config`
    :raises ValueError: If nothing matches or if more than one record
                        matches.
    """
    catalog = catalog if catalog is not None else default_catalog
    results = catalog.get(spec, wrapped=True)

    if len(results) == 0:
        raise ValueError("no configuration for: {0}".format(spec))
    elif len(results) > 1:
        raise ValueError("the specification {0} is ambiguous: {1}"
                         .format(spec, ", ".join(result["id"]
                                                 for result in results)))

    return Config.from_record(results[0], remote)
