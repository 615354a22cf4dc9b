class Remote(object):
    name = None

    def __init__(self, conf=None):
        self.conf = conf if conf is not None else {}

    def fetch_listing(self):
        """
        Fetch the raw platform listing of the service.

        :returns: The decoded listing.
        :rtype: :class:`list`
        :raises saucebrowsers.exceptions.LoadError: When the listing
                cannot be fetched or decoded.
        """
        raise NotImplementedError()

    def __call__(self):
        return self.fetch_listing()
