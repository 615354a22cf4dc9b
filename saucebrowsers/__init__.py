# To re-export here.
from .exceptions import SauceBrowsersError, LoadError, NormalizationError
from .capabilities import BrowserRecord, CAPABILITY_FIELDS, INTERNAL_FIELDS
from .normalize import Normalizer, LatestIndex, normalize
from .matcher import match, OS_TRANSLATIONS
from .catalog import *
from .remote.saucelabs import SAUCE_URL
from .shrinkwrap import DEFAULT_SHRINKWRAP
from .config import Config, get_config
