"""
Canonical browser records and the capability field vocabulary.
"""

# The order matters only for display purposes.
CAPABILITY_FIELDS = (
    "browserName",        # "firefox", "chrome", but also "android"
    "version",            # "42.0"
    "platform",           # "OS X 10.10"
    "deviceName",         # "Samsung Galaxy S5 Device"
    "platformVersion",    # "4.4"
    "platformName",       # "Android"
    "screenResolution",   # "1024x768", only set when requested
    "deviceOrientation",  # "landscape", only set when requested
    "appiumVersion",
)

INTERNAL_FIELDS = ("id", "family")

# Spec fields that are not compared against capability values.
NON_CAPABILITY_SPEC_FIELDS = ("id", "family", "screenResolution",
                              "deviceOrientation")


def project(fields):
    """
    Build a capability dictionary out of ``fields``, keeping only the
    keys listed in :data:`CAPABILITY_FIELDS` whose value is truthy.
    Fields that are absent or false are omitted rather than set to
    ``None``: the presence of a field is significant when matching.

    :param fields: A mapping of intermediate values.
    :returns: A new dictionary.
    """
    return {field: fields[field] for field in CAPABILITY_FIELDS
            if fields.get(field)}


class BrowserRecord(dict):

    def __init__(self, id, family, resolutions, desired_capabilities):
        """
        A browser record is a plain dictionary, so that it can be
        dumped as JSON or handed to a remote driver without
        conversion. It has the following keys:

        * ``id``: the alias of the record, like
          ``chrome_43_Windows_2012_R2_Desktop``.

        * ``family``: a coarse grouping like ``Chrome`` or ``Appium -
          iPhone``.

        * ``resolutions``: the list of screen resolutions supported,
          or ``None`` if the listing did not provide any.

        * ``desiredCapabilities``: the capabilities that apply to the
          record.

        :param id: The alias.
        :type id: :class:`str`
        :param family: The family.
        :type family: :class:`str`
        :param resolutions: The supported resolutions.
        :type resolutions: :class:`list` or ``None``
        :param desired_capabilities: The capabilities.
        :type desired_capabilities: :class:`dict`
        """
        super(BrowserRecord, self).__init__(
            id=id,
            family=family,
            resolutions=resolutions,
            desiredCapabilities=desired_capabilities)

    @classmethod
    def from_dict(cls, data):
        """
        Create a record from a dictionary already shaped like a record,
        for instance one read from an extension file.

        :raises ValueError: If ``data`` is not shaped like a record.
        """
        if not isinstance(data, dict):
            raise ValueError("a browser record must be an object, got: {0!r}"
                             .format(data))

        if "id" not in data:
            raise ValueError("a browser record must have an id: {0!r}"
                             .format(data))

        caps = data.get("desiredCapabilities") or {}
        if not isinstance(caps, dict):
            raise ValueError("desiredCapabilities must be an object: {0!r}"
                             .format(data))

        resolutions = data.get("resolutions")
        if resolutions is not None and (
                not isinstance(resolutions, list) or
                not all(isinstance(res, str) for res in resolutions)):
            raise ValueError("resolutions must be an array of strings: {0!r}"
                             .format(data))

        return cls(data["id"], data.get("family"), resolutions, dict(caps))

    @property
    def id(self):
        return self["id"]

    @property
    def family(self):
        return self["family"]

    @property
    def resolutions(self):
        return self["resolutions"]

    @property
    def capabilities(self):
        return self["desiredCapabilities"]
