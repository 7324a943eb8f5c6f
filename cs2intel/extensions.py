"""Flask extensions for the application."""
from flask_wtf.csrf import CSRFProtect

from .cache import CacheManager
from .roster import RosterClient
from .stats import StatsClient

csrf = CSRFProtect()
cache = CacheManager()
roster = RosterClient()
faceit = StatsClient()
