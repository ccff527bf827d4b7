"""Carbon level display table: label, icon and tint per level."""

from dataclasses import dataclass

from carbonwidget.models.forecast import ForecastForPoint


@dataclass(frozen=True)
class Tint:
    red: int
    green: int
    blue: int

    @property
    def rgb(self) -> tuple[int, int, int]:
        return (self.red, self.green, self.blue)

    @property
    def unit(self) -> tuple[float, float, float]:
        """Components scaled to 0-1, as colour APIs on the render side expect."""
        return (self.red / 255, self.green / 255, self.blue / 255)

    @property
    def hex(self) -> str:
        return f"#{self.red:02x}{self.green:02x}{self.blue:02x}"


@dataclass(frozen=True)
class LevelDisplay:
    label: str
    icon: str
    tint: Tint


LEVEL_TABLE: dict[int, LevelDisplay] = {
    1: LevelDisplay("très peu carbonée", "1.circle", Tint(0, 168, 73)),
    2: LevelDisplay("peu carbonée", "2.circle", Tint(52, 188, 110)),
    3: LevelDisplay("modérement carbonée", "3.circle", Tint(255, 206, 0)),
    4: LevelDisplay("très carbonée", "4.circle", Tint(234, 69, 34)),
    5: LevelDisplay("extrêmement carbonée", "5.circle", Tint(170, 12, 64)),
}

UNKNOWN_LEVEL = LevelDisplay(
    "🤷‍♂️", "exclamationmark.circle", Tint(252, 158, 158)
)

ERROR_ICON = "exclamationmark.circle"
ERROR_TEXT = "Une erreur est survenue"
NEXT_LOW_TEXT = "Prochain"


def display_for_level(level: int) -> LevelDisplay:
    """Map a carbon level to its display triple; unknown levels get the fallback."""
    return LEVEL_TABLE.get(level, UNKNOWN_LEVEL)


@dataclass(frozen=True)
class DisplayPoint:
    """A forecast point paired with how it should be shown."""

    point: ForecastForPoint
    display: LevelDisplay

    @classmethod
    def from_point(cls, point: ForecastForPoint) -> "DisplayPoint":
        return cls(point=point, display=display_for_level(point.level))

    @property
    def text(self) -> str:
        return self.display.label

    @property
    def icon(self) -> str:
        return self.display.icon

    @property
    def tint(self) -> Tint:
        return self.display.tint
