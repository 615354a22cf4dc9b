"""
Matching of partial browser specifications against canonical browser
records.

A specification is a dictionary that uses the capability field names
(``browserName``, ``platform``, etc.) plus ``id`` and ``family``. Every
field is optional and an empty specification matches every record.
"""
from .capabilities import CAPABILITY_FIELDS, NON_CAPABILITY_SPEC_FIELDS
from .normalize import clean_platform_name

LATEST = "latest"

# Sauce Labs leaves certain OSes out of its listing API but they can
# be requested through the capabilities API. These are its internal
# names for those Windows releases.
OS_TRANSLATIONS = {
    "Windows XP": "Windows 2003",
    "Windows 7": "Windows 2008",
    "Windows 8": "Windows 2012",
    "Windows 8.1": "Windows 2012 R2",
}

# The same table, in the form the names take inside ids, in both
# directions.
ID_OS_TRANSLATIONS = tuple(
    [(clean_platform_name(friendly), clean_platform_name(internal))
     for (friendly, internal) in sorted(OS_TRANSLATIONS.items())] +
    [(clean_platform_name(internal), clean_platform_name(friendly))
     for (friendly, internal) in sorted(OS_TRANSLATIONS.items())])

# Raw names that the normalizer rewrites in ids.
_ID_NAME_TO_RAW = {
    "IE": "internet explorer",
}

_COMPARED_FIELDS = tuple(field for field in CAPABILITY_FIELDS
                         if field not in NON_CAPABILITY_SPEC_FIELDS)


def resolve_latest(record_id, latest):
    """
    Replace the ``latest`` placeholder in an id, like
    ``chrome_latest_Windows_2012_Desktop``, with the highest version
    recorded in the latest-version index.

    :param record_id: The id to resolve.
    :param latest: A :class:`.LatestIndex`.
    :returns: The resolved id. If the id has no placeholder, or the
              index has no version for it, the id is returned as-is.
    """
    if not record_id or not latest:
        return record_id

    parts = record_id.split(LATEST)
    if len(parts) != 2 or not all(parts):
        return record_id

    prefix, suffix = parts
    browser = prefix.replace("_", "", 1)
    os_key = suffix.replace("_", "", 1)

    version = latest.lookup(browser, os_key)
    if version is None and browser in _ID_NAME_TO_RAW:
        version = latest.lookup(_ID_NAME_TO_RAW[browser], os_key)

    if version is None:
        return record_id

    return prefix + str(version) + suffix


def id_matches(record_id, wanted):
    if record_id == wanted:
        return True

    for (name, translated) in ID_OS_TRANSLATIONS:
        if name in wanted and record_id == wanted.replace(name, translated, 1):
            return True

    return False


def platform_matches(record_platform, wanted):
    # Only the friendly name is translated. Asking for "Windows 2012 R2"
    # does not find a record that says "Windows 8.1".
    if record_platform is None:
        return False

    return record_platform == wanted or \
        record_platform == OS_TRANSLATIONS.get(wanted)


def record_matches(record, spec):
    """
    Whether ``record`` satisfies ``spec``. The ``id`` of the
    specification must already have had its ``latest`` placeholder
    resolved.
    """
    wanted_id = spec.get("id")
    if wanted_id and not id_matches(record["id"], wanted_id):
        return False

    family = spec.get("family")
    if family and record.get("family") != family:
        return False

    # A record must *explicitly* support the resolution.
    resolution = spec.get("screenResolution")
    if resolution and resolution not in (record.get("resolutions") or ()):
        return False

    caps = record["desiredCapabilities"]
    for field in _COMPARED_FIELDS:
        wanted = spec.get(field)
        if not wanted:
            continue

        actual = caps.get(field)
        if field == "platform":
            if not platform_matches(actual, wanted):
                return False
        elif actual is None or str(actual) != str(wanted):
            return False

    return True


def fix_capabilities(caps):
    """
    Adjust the capabilities of a wrapped result so that Sauce Labs
    accepts them. ``caps`` is modified.
    """
    if caps.get("appiumVersion"):
        # Appium drives iOS through Safari.
        if caps.get("platformName") == "iOS":
            caps["browserName"] = "Safari"
    elif caps.get("platform") == "iOS":
        caps["platform"] = "OS X 10.10"
    elif caps.get("platform") == "Android":
        # The driver wants a desktop platform even for mobile targets.
        caps["platform"] = "Linux"

    return caps


def shape_result(record, spec, wrapped):
    caps = dict(record["desiredCapabilities"])

    for field in ("deviceOrientation", "screenResolution"):
        if spec.get(field):
            caps[field] = spec[field]

    if not wrapped:
        return caps

    result = dict(record)
    result["desiredCapabilities"] = fix_capabilities(caps)
    return result


def match(spec, records, latest=None, wrapped=False):
    """
    Return the records that match a specification.

    Records are matched by ``id`` (after ``latest`` resolution and
    Windows name translation), by ``family``, by supported
    ``screenResolution`` and by the value of every other capability
    field given in the specification.

    The results carry ``deviceOrientation`` and ``screenResolution``
    from the specification, if given.

    :param spec: The specification. It is not modified.
    :type spec: :class:`dict`
    :param records: The records to search.
    :param latest: The :class:`.LatestIndex` used to resolve
                   ``latest`` in ids.
    :param wrapped: If ``True``, return whole records with their
                    capabilities fixed up for Sauce Labs. Otherwise,
                    return only the capabilities.
    :returns: The results, possibly empty.
    :rtype: :class:`list` of :class:`dict`
    """
    spec = dict(spec or {})
    if spec.get("id"):
        spec["id"] = resolve_latest(spec["id"], latest)

    return [shape_result(record, spec, wrapped) for record in records
            if record_matches(record, spec)]
