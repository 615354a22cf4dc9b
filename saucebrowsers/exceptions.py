class SauceBrowsersError(Exception):
    pass


class LoadError(SauceBrowsersError):
    """
    Raised when a listing, a shrinkwrap snapshot or an extension file
    cannot be obtained or parsed. The catalog is left untouched.
    """
    pass


class NormalizationError(SauceBrowsersError):
    """
    Raised when a raw listing entry has a field that must be numeric
    but is not.
    """
    pass
