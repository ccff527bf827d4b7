"""Forecast locations supported by the Adapt API."""

from enum import IntEnum


class Location(IntEnum):
    DEFAULT = 0
    FRANCE_CONTINENTALE = 1
    BELGIUM = 2
    GERMANY = 3
    AUSTRIA = 4
    ITALIA = 5
    NETHERLANDS = 6
    SPAIN = 7
    SWITZERLAND = 8
    GUADELOUPE = 9
    UNITED_KINGDOM = 10

    @property
    def resolved(self) -> "Location":
        """The real location this value stands for (DEFAULT aliases France)."""
        if self is Location.DEFAULT:
            return Location.FRANCE_CONTINENTALE
        return self

    @property
    def short(self) -> str:
        """Code sent as the ``location`` query parameter."""
        return _SHORT[self.resolved]

    @property
    def long(self) -> str:
        """Display name, lowercase as shipped; capitalize when rendering."""
        return _LONG[self.resolved]

    @classmethod
    def from_code(cls, value: "str | int | Location") -> "Location":
        """Resolve a short code, enum name or raw integer value."""
        if isinstance(value, Location):
            return value
        if isinstance(value, int):
            return cls(value)
        text = value.strip()
        if text.isdigit():
            return cls(int(text))
        lowered = text.lower()
        for loc in cls:
            if loc is not cls.DEFAULT and _SHORT[loc] == lowered:
                return loc
        try:
            return cls[text.upper().replace("-", "_")]
        except KeyError:
            raise ValueError(f"Unknown location: {value!r}") from None


_SHORT: dict[Location, str] = {
    Location.FRANCE_CONTINENTALE: "fr",
    Location.BELGIUM: "be",
    Location.GERMANY: "de",
    Location.AUSTRIA: "at",
    Location.ITALIA: "it",
    Location.NETHERLANDS: "nl",
    Location.SPAIN: "es",
    Location.SWITZERLAND: "ch",
    Location.GUADELOUPE: "gp",
    Location.UNITED_KINGDOM: "uk",
}

_LONG: dict[Location, str] = {
    Location.FRANCE_CONTINENTALE: "france continentale",
    Location.BELGIUM: "belgique",
    Location.GERMANY: "deutschland",
    Location.AUSTRIA: "österreich",
    Location.ITALIA: "italia",
    Location.NETHERLANDS: "nederlanden",
    Location.SPAIN: "españa",
    Location.SWITZERLAND: "suisse",
    Location.GUADELOUPE: "guadeloupe",
    Location.UNITED_KINGDOM: "united kingdom",
}

REAL_LOCATIONS: list[Location] = list(_SHORT)
