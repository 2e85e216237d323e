# =============================================================================
# core/sites.py  -  Holy-Site Catalog & Location Lookup
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds a small in-memory catalog of pilgrimage sites and common starting
#   cities, and resolves free-text names to a Location with coordinates.
#
# MOCK DATA:
#   A real deployment would ask a places/geocoding API.  The interface is
#   get_site(name) -> HolySite and resolve_location(name) -> Location, so
#   swapping in a live lookup only touches this module.
#
# IDEMPOTENCY:
#   Every function here is a pure read.  Same name in, same answer out.
# =============================================================================

from typing import Optional

from core.models import Coordinate, HolySite, Location, Religion


# -----------------------------------------------------------------------------
# Mock site database
# -----------------------------------------------------------------------------
# The sites span very different climates (Himalayan shrines, the Gangetic
# plain, the coast) so the same trip dates can produce different verdicts.
# -----------------------------------------------------------------------------
_HOLY_SITES: dict[str, HolySite] = {
    site.site_id: site
    for site in [
        HolySite(
            site_id="kashi-vishwanath",
            name="Kashi Vishwanath Temple",
            city="Varanasi",
            religion=Religion.HINDUISM,
            coordinate=Coordinate(25.3109, 83.0107),
            significance="One of the twelve Jyotirlingas, on the western bank of the Ganges.",
            best_months=["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"],
        ),
        HolySite(
            site_id="kedarnath",
            name="Kedarnath Temple",
            city="Kedarnath",
            religion=Religion.HINDUISM,
            coordinate=Coordinate(30.7352, 79.0669),
            significance="Himalayan Jyotirlinga, open only from late spring to autumn.",
            best_months=["May", "Jun", "Sep", "Oct"],
        ),
        HolySite(
            site_id="vaishno-devi",
            name="Vaishno Devi Temple",
            city="Katra",
            religion=Religion.HINDUISM,
            coordinate=Coordinate(33.0308, 74.9490),
            significance="Cave shrine reached by a 12 km trek from Katra.",
            best_months=["Mar", "Apr", "May", "Sep", "Oct"],
        ),
        HolySite(
            site_id="tirumala",
            name="Tirumala Venkateswara Temple",
            city="Tirupati",
            religion=Religion.HINDUISM,
            coordinate=Coordinate(13.6833, 79.3474),
            significance="Hill temple of Lord Venkateswara in the Seshachalam hills.",
            best_months=["Sep", "Oct", "Nov", "Dec", "Jan", "Feb"],
        ),
        HolySite(
            site_id="golden-temple",
            name="Golden Temple",
            city="Amritsar",
            religion=Religion.SIKHISM,
            coordinate=Coordinate(31.6200, 74.8765),
            significance="Harmandir Sahib, the holiest gurdwara of Sikhism.",
            best_months=["Oct", "Nov", "Feb", "Mar"],
        ),
        HolySite(
            site_id="mahabodhi",
            name="Mahabodhi Temple",
            city="Bodh Gaya",
            religion=Religion.BUDDHISM,
            coordinate=Coordinate(24.6959, 84.9913),
            significance="Site of the Buddha's enlightenment under the Bodhi tree.",
            best_months=["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"],
        ),
        HolySite(
            site_id="ajmer-sharif",
            name="Ajmer Sharif Dargah",
            city="Ajmer",
            religion=Religion.ISLAM,
            coordinate=Coordinate(26.4561, 74.6282),
            significance="Shrine of the Sufi saint Moinuddin Chishti.",
            best_months=["Oct", "Nov", "Dec", "Jan", "Feb", "Mar"],
        ),
        HolySite(
            site_id="palitana",
            name="Palitana Temples",
            city="Palitana",
            religion=Religion.JAINISM,
            coordinate=Coordinate(21.4833, 71.8000),
            significance="Over 800 Jain temples on Shatrunjaya hill.",
            best_months=["Nov", "Dec", "Jan", "Feb"],
        ),
        HolySite(
            site_id="velankanni",
            name="Basilica of Our Lady of Good Health",
            city="Velankanni",
            religion=Religion.CHRISTIANITY,
            coordinate=Coordinate(10.6806, 79.8497),
            significance="Marian shrine on the Coromandel coast.",
            best_months=["Dec", "Jan", "Feb", "Mar"],
        ),
    ]
}

# Common starting points that are not pilgrimage sites themselves
_CITIES: dict[str, Coordinate] = {
    "delhi": Coordinate(28.6139, 77.2090),
    "mumbai": Coordinate(19.0760, 72.8777),
    "kolkata": Coordinate(22.5726, 88.3639),
    "chennai": Coordinate(13.0827, 80.2707),
    "bengaluru": Coordinate(12.9716, 77.5946),
    "hyderabad": Coordinate(17.3850, 78.4867),
    "ahmedabad": Coordinate(23.0225, 72.5714),
    "jaipur": Coordinate(26.9124, 75.7873),
}


def get_site(name_or_id: str) -> Optional[HolySite]:
    """Look up a site by id, exact name, city, or a unique-enough fragment.

    Matching is case-insensitive.  Exact id/name/city matches win over
    substring matches; among substring matches the first catalog entry wins.
    """
    key = name_or_id.strip().lower()
    if not key:
        return None

    if key in _HOLY_SITES:
        return _HOLY_SITES[key]

    for site in _HOLY_SITES.values():
        if key in (site.name.lower(), site.city.lower()):
            return site

    for site in _HOLY_SITES.values():
        if key in site.name.lower() or key in site.city.lower():
            return site
    return None


def list_available_sites(religion: Optional[Religion] = None) -> list[HolySite]:
    """All catalog sites, optionally filtered by religion."""
    return [
        site for site in _HOLY_SITES.values()
        if religion is None or site.religion is religion
    ]


def resolve_location(name: str) -> Optional[Location]:
    """Resolve a start point or destination name to a Location.

    Holy sites are tried first, then the known-city list.
    """
    site = get_site(name)
    if site is not None:
        return site.to_location()

    key = name.strip().lower()
    for city, coordinate in _CITIES.items():
        if city == key or (key and key in city):
            return Location(name=city.title(), coordinate=coordinate)
    return None
