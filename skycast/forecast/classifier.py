"""Weather code classification into a description and an icon identifier."""

from enum import StrEnum


class WeatherCondition(StrEnum):
    CLEAR = "Clear"
    PARTLY_CLOUDY = "Partly Cloudy"
    CLOUDY = "Cloudy"
    FOGGY = "Foggy"
    RAINY = "Rainy"
    SNOWY = "Snowy"
    STORMY = "Stormy"
    UNKNOWN = "Unknown"


CONDITION_ICONS: dict[WeatherCondition, str] = {
    WeatherCondition.CLEAR: "sun",
    WeatherCondition.PARTLY_CLOUDY: "cloud-sun",
    WeatherCondition.CLOUDY: "cloud",
    WeatherCondition.FOGGY: "cloud-fog",
    WeatherCondition.RAINY: "cloud-rain",
    WeatherCondition.SNOWY: "cloud-snow",
    WeatherCondition.STORMY: "cloud-bolt-rain",
    WeatherCondition.UNKNOWN: "question-mark",
}

# WMO weather interpretation codes as reported by Open-Meteo
_CODE_TABLE: dict[WeatherCondition, tuple[int, ...]] = {
    WeatherCondition.CLEAR: (0,),
    WeatherCondition.PARTLY_CLOUDY: (1, 2),
    WeatherCondition.CLOUDY: (3,),
    WeatherCondition.FOGGY: (45, 48),
    WeatherCondition.RAINY: (51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 80, 81, 82),
    WeatherCondition.SNOWY: (71, 73, 75, 77, 85, 86),
    WeatherCondition.STORMY: (95, 96, 99),
}

CONDITION_BY_CODE: dict[int, WeatherCondition] = {
    code: condition for condition, codes in _CODE_TABLE.items() for code in codes
}


def condition_for(code: int) -> WeatherCondition:
    return CONDITION_BY_CODE.get(code, WeatherCondition.UNKNOWN)


def classify(code: int) -> tuple[str, str]:
    """Map a weather code to (description, icon_id). Unknown codes never fail."""
    condition = condition_for(code)
    return condition.value, CONDITION_ICONS[condition]
