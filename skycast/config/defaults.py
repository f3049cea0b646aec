"""Default endpoints and request fields."""

OPEN_METEO_BASE_URL = "https://api.open-meteo.com/v1/forecast"
NOMINATIM_BASE_URL = "https://nominatim.openstreetmap.org"
IPAPI_BASE_URL = "https://ipapi.co"

DEFAULT_USER_AGENT = "skycast/0.1.0"

DEFAULT_DAILY_FIELDS: tuple[str, ...] = ("temperature_2m_max", "weathercode")
