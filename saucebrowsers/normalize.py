"""
Conversion of the raw Sauce Labs platform listing into canonical
browser records.

The listing has two shapes of entries: those for the ``webdriver``
backend (desktop browsers and simulators) and those for the ``appium``
backend (mobile devices). Entries are classified once, up front, into
:class:`WebdriverEntry` or :class:`AppiumEntry` and each variant has
its own builder.
"""
import collections
import logging
import re

from .capabilities import BrowserRecord, project
from .exceptions import NormalizationError

logger = logging.getLogger(__name__)

WEBDRIVER = "webdriver"
APPIUM = "appium"

DESKTOP = "Desktop"
ANDROID_EMULATOR = "Android Emulator"

_LISTING_FIELDS = ("api_name", "device", "os", "short_version", "long_name",
                   "resolutions", "recommended_backend_version", "version")

WebdriverEntry = collections.namedtuple("WebdriverEntry", _LISTING_FIELDS)
AppiumEntry = collections.namedtuple("AppiumEntry", _LISTING_FIELDS)

_ENTRY_CLASSES = {
    WEBDRIVER: WebdriverEntry,
    APPIUM: AppiumEntry,
}

_leading_int_re = re.compile(r"^\s*(\d+)")
_leading_float_re = re.compile(r"^\s*(\d+(?:\.\d*)?|\.\d+)")


def classify_entry(raw):
    """
    Turn a raw listing entry into the variant that corresponds to its
    automation backend.

    :param raw: An entry of the listing.
    :type raw: :class:`dict`
    :returns: A :class:`WebdriverEntry`, an :class:`AppiumEntry`, or
              ``None`` if the backend is not supported or the entry
              is not an object.
    """
    if not isinstance(raw, dict):
        return None

    cls = _ENTRY_CLASSES.get(raw.get("automation_backend"))
    if cls is None:
        return None

    return cls(**{field: raw.get(field) for field in _LISTING_FIELDS})


def clean_platform_name(value):
    """
    Make a string usable as a component of a browser id.
    """
    if value is None:
        return ""
    return str(value).replace(" ", "_").replace(".", "_")


def first_match(rules, value, default):
    """
    Return the label of the first rule whose predicate accepts
    ``value``, or ``default`` if none does.

    :param rules: A sequence of ``(predicate, label)`` pairs.
    """
    for predicate, label in rules:
        if predicate(value):
            return label
    return default


def _contains(needle):
    return lambda value: needle in value


def _starts_with(prefix):
    return lambda value: value.startswith(prefix)


def _equals(expected):
    return lambda value: value == expected


# Applied to the lowercased device field of appium entries.
APPIUM_OS_RULES = (
    (_contains("android"), "Android"),
    (_contains("ipad"), "iOS"),
    (_contains("iphone"), "iOS"),
)

# Some devices are named things like "Droid4".
APPIUM_DEFAULT_OS = "Android"

# Applied to the api_name of appium entries.
APPIUM_FAMILY_RULES = (
    (_contains("android"), "Appium - Android"),
    (_contains("ipad"), "Appium - iPad"),
    (_contains("iphone"), "Appium - iPhone"),
)

APPIUM_DEFAULT_FAMILY = "Appium - Other"

# Applied to the canonical name of webdriver entries.
WEBDRIVER_FAMILY_RULES = (
    (_equals("IE"), "IE"),
    (_starts_with("android"), "Webkit Android"),
    (_starts_with("firefox"), "Firefox (Gecko)"),
    (_starts_with("ipad"), "Webkit iPad"),
    (_starts_with("iphone"), "Webkit iPhone"),
    (_starts_with("opera"), "Opera"),
    (_starts_with("safari"), "Webkit Safari"),
    (_starts_with("chrome"), "Chrome"),
)

WEBDRIVER_DEFAULT_FAMILY = "Other"

# Simulators report the OS of the host rather than their own.
WEBDRIVER_SIMULATOR_OS_RULES = (
    (_equals("ipad"), "iOS"),
    (_equals("iphone"), "iOS"),
    (_equals("android"), "Android"),
)

_NAME_ALIASES = {
    "internet explorer": "IE",
}


def mac_to_osx(name):
    """
    The listing says "Mac 10.10" where capabilities want "OS X 10.10".
    """
    if name and name.startswith("Mac"):
        return "OS X" + name[3:]
    return name


def parse_leading_int(value):
    """
    Parse the integer at the start of ``value``, so that ``"42.0"``
    gives ``42``.

    :returns: The integer, or ``None`` if ``value`` does not start with
              one.
    """
    match = _leading_int_re.match(str(value)) if value is not None else None
    return int(match.group(1)) if match else None


class LatestIndex(dict):
    """
    Maps a raw browser name to a dictionary that maps an OS key (like
    ``Windows_2012_Desktop``) to the highest major version seen for
    that browser on that OS.
    """

    def record(self, name, os_key, short_version):
        version = parse_leading_int(short_version)
        if version is None:
            logger.debug("not tracking non-numeric version %r of %s on %s",
                         short_version, name, os_key)
            return

        by_os = self.setdefault(name, {})
        current = by_os.get(os_key)
        if current is None or current < version:
            by_os[os_key] = version

    def lookup(self, name, os_key):
        return self.get(name, {}).get(os_key)


def _android_emulator_browser(platform_version):
    match = _leading_float_re.match(str(platform_version))
    if not match:
        raise NormalizationError(
            "expected platform version to be a number, but was {0!r}"
            .format(platform_version))

    version = float(match.group(1))
    if not version:
        return None

    return "Chrome" if version >= 6.0 else "Browser"


def _build_appium(entry):
    device = (entry.device or "").lower()
    os_name = first_match(APPIUM_OS_RULES, device, APPIUM_DEFAULT_OS)
    family = first_match(APPIUM_FAMILY_RULES, entry.api_name or "",
                         APPIUM_DEFAULT_FAMILY)
    device_name = entry.long_name

    host_os_name = "Android" if "android" in device else entry.os
    host_os_name = mac_to_osx(host_os_name)

    record_id = "_".join(clean_platform_name(part) for part in
                         (device_name, os_name, entry.short_version,
                          host_os_name))

    fields = {
        "appiumVersion": entry.recommended_backend_version,
        "platformVersion": entry.short_version,
        "platformName": os_name,
    }

    return record_id, family, device_name, fields


def _build_webdriver(entry, latest):
    name = _NAME_ALIASES.get(entry.api_name, entry.api_name) or ""
    family = first_match(WEBDRIVER_FAMILY_RULES, name,
                         WEBDRIVER_DEFAULT_FAMILY)

    # E.g. device: "Nexus7C", long_name: "Google Nexus 7C Emulator"
    device_name = entry.long_name if entry.device else DESKTOP
    os_name = first_match(WEBDRIVER_SIMULATOR_OS_RULES, name, entry.os)
    os_name = mac_to_osx(os_name)

    os_key = clean_platform_name(os_name) + "_" + \
        clean_platform_name(device_name)
    record_id = "_".join((clean_platform_name(name),
                          clean_platform_name(entry.short_version),
                          os_key))

    latest.record(entry.api_name, os_key, entry.short_version)

    fields = {
        "platform": os_name,
        "browserName": entry.api_name,
        "version": entry.short_version,
    }

    if device_name and "android" in device_name.lower():
        fields["platformVersion"] = entry.short_version or entry.version
        fields["platformName"] = os_name

    if device_name == ANDROID_EMULATOR and fields.get("platformVersion"):
        browser_name = _android_emulator_browser(fields["platformVersion"])
        if browser_name:
            fields["browserName"] = browser_name

    return record_id, family, device_name, fields


def build_record(entry, latest):
    """
    Build the canonical record for a classified entry.

    :param entry: A :class:`WebdriverEntry` or :class:`AppiumEntry`.
    :param latest: The :class:`LatestIndex` to update. Only webdriver
                   entries update it.
    :returns: A :class:`BrowserRecord`.
    :raises NormalizationError: If the entry is an Android Emulator
                                whose platform version is not a number.
    """
    if isinstance(entry, AppiumEntry):
        record_id, family, device_name, fields = _build_appium(entry)
    else:
        record_id, family, device_name, fields = \
            _build_webdriver(entry, latest)

    # Sauce Labs has no "Desktop" device. We made it up for display.
    if device_name != DESKTOP:
        fields["deviceName"] = device_name

    return BrowserRecord(record_id, family, entry.resolutions,
                         project(fields))


class Normalizer(object):

    def __init__(self, latest=None):
        self.latest = latest if latest is not None else LatestIndex()

    def normalize(self, data):
        """
        Convert a raw listing into browser records sorted by id. Entries
        for unsupported backends are discarded. The latest-version index
        of this normalizer is extended as a side effect.

        :param data: The raw listing.
        :type data: :class:`list` of :class:`dict`
        :returns: The records.
        :rtype: :class:`list` of :class:`.BrowserRecord`
        """
        records = []
        discarded = 0
        for raw in data:
            entry = classify_entry(raw)
            if entry is None:
                discarded += 1
                continue

            records.append(build_record(entry, self.latest))

        if discarded:
            logger.debug("discarded %d unsupported entries", discarded)

        records.sort(key=lambda record: record.id)
        return records


def normalize(data, latest=None):
    """
    Convenience function that runs a :class:`Normalizer` over ``data``.

    :param latest: A :class:`LatestIndex` to extend, if any.
    """
    return Normalizer(latest).normalize(data)
