"""Global constants for the cs2intel application."""

# Standard CS2 competitive map pool, in display order
CS2_MAPS = (
    "Ancient",
    "Anubis",
    "Dust2",
    "Inferno",
    "Mirage",
    "Nuke",
    "Overpass",
)

# Identity resolution
STEAM_PROVIDER = "STEAM"
STEAM64_BASE = 76561197960265728

# Cache-related constants
DEFAULT_CACHE_TTL = 24 * 60 * 60 * 1000  # milliseconds
PLAYER_CACHE_TTL = 24 * 60 * 60 * 1000  # milliseconds

# Stats lookups
STATS_BATCH_SIZE = 5
FACEIT_GAME = "cs2"

# Aggregation
MIN_MAP_MATCHES = 5
TOP_N_PLAYERS = 5
TOP_MAPS_PER_PLAYER = 3

# Confidence labels for team games on a map
CONFIDENCE_HIGH_GAMES = 50
CONFIDENCE_MED_GAMES = 20
CONFIDENCE_LOW_GAMES = 5

# Access tokens are refreshed this long before they expire
TOKEN_REFRESH_BUFFER_SECONDS = 60

# Upstream
DEFAULT_UPSTREAM_TIMEOUT = 30
FACEIT_API_URL = "https://open.faceit.com/data/v4"
CHALLENGERMODE_API_URL = "https://publicapi.challengermode.com/mk1"
CHALLENGERMODE_GRAPHQL_URL = "https://publicapi.challengermode.com/graphql"
