"""
Centralized constants for the supplier directory backend.

Listing defaults, rate limits and the GEO location vocabulary.
Import from here instead of redefining.
"""

# Public listing pagination
DEFAULT_PAGE = 1
DEFAULT_LISTING_LIMIT = 20
MAX_LISTING_LIMIT = 100

# Description must be longer than this to count towards profile completeness
MIN_DESCRIPTION_LENGTH = 20

# Category overview: number of coverage areas reported, cache lifetime (seconds)
LOCATION_STATS_LIMIT = 20
CATEGORY_CACHE_TTL = 3600

# Quote intake
EXPECTED_QUOTE_RESPONSE = "1-2 business days"
DEFAULT_QUOTE_TIMELINE = "planning"

# Listing statuses that belong to a real account
CLAIMED_LISTING_STATUSES = {"claimed", "verified"}

# slowapi limit strings (general: 100 per 15 minutes, quote: 10 per hour)
RATE_LIMITS = {
    "general": "100 per 15 minutes",
    "quote": "10 per hour",
}

# Major UK cities for GEO pages
MAJOR_LOCATIONS = (
    # Wales
    "Cardiff",
    "Newport",
    "Swansea",
    "Bridgend",
    "Barry",
    "Neath",
    "Port Talbot",
    "Pontypridd",
    "Cwmbran",
    "Caerphilly",
    "Merthyr Tydfil",
    "Llanelli",
    "Wrexham",
    "Rhondda",
    "Aberdare",
    # South West England
    "Bristol",
    "Bath",
    "Gloucester",
    "Cheltenham",
    "Exeter",
    "Plymouth",
    "Taunton",
    "Swindon",
    "Weston-super-Mare",
    "Torquay",
    "Barnstaple",
    "Truro",
    "Salisbury",
    "Yeovil",
    "Poole",
    "Bournemouth",
)

# Vendors whose city is one of these (or empty) serve the whole country
NATIONAL_CITY_VALUES = frozenset({"", "uk", "united kingdom", "nationwide"})

# Neighbouring towns suggested on location pages, keyed by location slug
NEARBY_LOCATIONS = {
    "cardiff": ("Newport", "Bridgend", "Barry", "Pontypridd", "Caerphilly"),
    "newport": ("Cardiff", "Bristol", "Cwmbran", "Pontypool", "Abergavenny"),
    "bristol": ("Bath", "Newport", "Gloucester", "Weston-super-Mare", "Clevedon"),
    "swansea": ("Neath", "Port Talbot", "Llanelli", "Bridgend", "Carmarthen"),
    "bath": ("Bristol", "Trowbridge", "Frome", "Chippenham", "Wells"),
    "gloucester": ("Cheltenham", "Bristol", "Stroud", "Cirencester", "Tewkesbury"),
    "exeter": ("Taunton", "Torquay", "Plymouth", "Barnstaple", "Newton Abbot"),
    "plymouth": ("Exeter", "Torquay", "Truro", "Bodmin", "Tavistock"),
}
