"""Source trust configuration for cross-source conflict resolution.

Trust ranks are integers from 1 to 10; higher means more trusted. They are
only consulted as a tie-break when a field conflict has to be resolved
automatically to a single source's value.

Source hierarchy (from most to least trusted):
1. Manufacturer / official product sites: 10 (generic manufacturer: 9)
2. Major trade distributors (Ferguson, HD Supply, Grainger): 8
3. Big-box retailers (Home Depot, Lowe's, Menards): 7
4. Industry specification databases: 6
5. General web: 4
"""

from typing import Dict

# Key: bare domain (lowercase, no "www."), or the special "default" entry
# Value: trust rank, higher is more trusted
SOURCE_TRUST_LEVELS: Dict[str, int] = {
    # Primary sources - manufacturer/official
    "ndspro.com": 10,
    "nds.com": 10,
    "manufacturer": 9,

    # Secondary sources - major distributors
    "ferguson.com": 8,
    "hdsupply.com": 8,
    "grainger.com": 8,
    "homedepot.com": 7,
    "lowes.com": 7,
    "menards.com": 7,

    # Tertiary sources - industry databases
    "sweets.construction.com": 6,
    "arcat.com": 6,
    "specagent.com": 6,

    # General web
    "default": 4,
}

# Key in SOURCE_TRUST_LEVELS holding the rank for unrecognized domains
DEFAULT_TRUST_KEY: str = "default"

# Used when a trust table carries no "default" entry at all
FALLBACK_TRUST_LEVEL: int = 4
