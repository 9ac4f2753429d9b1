import re


# Lower-case alias -> country name. Cities are included only where they are
# common stand-ins for the whole location field.
COUNTRY_ALIASES: dict[str, str] = {
    "argentina": "Argentina",
    "australia": "Australia",
    "sydney": "Australia",
    "melbourne": "Australia",
    "austria": "Austria",
    "bangladesh": "Bangladesh",
    "belgium": "Belgium",
    "brazil": "Brazil",
    "brasil": "Brazil",
    "são paulo": "Brazil",
    "canada": "Canada",
    "toronto": "Canada",
    "vancouver": "Canada",
    "chile": "Chile",
    "china": "China",
    "beijing": "China",
    "shanghai": "China",
    "shenzhen": "China",
    "hangzhou": "China",
    "colombia": "Colombia",
    "czech republic": "Czech Republic",
    "czechia": "Czech Republic",
    "denmark": "Denmark",
    "egypt": "Egypt",
    "finland": "Finland",
    "france": "France",
    "paris": "France",
    "germany": "Germany",
    "deutschland": "Germany",
    "berlin": "Germany",
    "munich": "Germany",
    "greece": "Greece",
    "hong kong": "Hong Kong",
    "india": "India",
    "bangalore": "India",
    "bengaluru": "India",
    "mumbai": "India",
    "delhi": "India",
    "new delhi": "India",
    "hyderabad": "India",
    "pune": "India",
    "chennai": "India",
    "indonesia": "Indonesia",
    "jakarta": "Indonesia",
    "iran": "Iran",
    "ireland": "Ireland",
    "dublin": "Ireland",
    "israel": "Israel",
    "italy": "Italy",
    "japan": "Japan",
    "tokyo": "Japan",
    "kenya": "Kenya",
    "malaysia": "Malaysia",
    "mexico": "Mexico",
    "netherlands": "Netherlands",
    "the netherlands": "Netherlands",
    "amsterdam": "Netherlands",
    "new zealand": "New Zealand",
    "nigeria": "Nigeria",
    "lagos": "Nigeria",
    "norway": "Norway",
    "pakistan": "Pakistan",
    "peru": "Peru",
    "philippines": "Philippines",
    "poland": "Poland",
    "portugal": "Portugal",
    "lisbon": "Portugal",
    "romania": "Romania",
    "russia": "Russia",
    "moscow": "Russia",
    "singapore": "Singapore",
    "south africa": "South Africa",
    "south korea": "South Korea",
    "korea": "South Korea",
    "seoul": "South Korea",
    "spain": "Spain",
    "madrid": "Spain",
    "barcelona": "Spain",
    "sweden": "Sweden",
    "stockholm": "Sweden",
    "switzerland": "Switzerland",
    "zurich": "Switzerland",
    "taiwan": "Taiwan",
    "taipei": "Taiwan",
    "thailand": "Thailand",
    "turkey": "Turkey",
    "türkiye": "Turkey",
    "istanbul": "Turkey",
    "ukraine": "Ukraine",
    "kyiv": "Ukraine",
    "united kingdom": "United Kingdom",
    "uk": "United Kingdom",
    "england": "United Kingdom",
    "scotland": "United Kingdom",
    "london": "United Kingdom",
    "united states": "United States",
    "united states of america": "United States",
    "usa": "United States",
    "us": "United States",
    "san francisco": "United States",
    "new york": "United States",
    "seattle": "United States",
    "california": "United States",
    "vietnam": "Vietnam",
    "viet nam": "Vietnam",
}

_SEPARATORS = re.compile(r"[,/|;()]+")


def extract_country(location: str | None) -> str | None:
    """Guess a country from a free-text profile location.

    Comma-separated parts are tried from the last one backward, since the
    country usually comes last. The full string is tried first so that
    multi-word aliases still match.
    """

    if not location:
        return None

    normalized = " ".join(location.lower().split())
    if normalized in COUNTRY_ALIASES:
        return COUNTRY_ALIASES[normalized]

    parts = [part.strip(" .") for part in _SEPARATORS.split(normalized)]
    for part in reversed(parts):
        if part in COUNTRY_ALIASES:
            return COUNTRY_ALIASES[part]

    return None
