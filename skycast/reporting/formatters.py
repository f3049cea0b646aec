"""Output formatters for the view state."""

import json

from skycast.models.state import ViewState


def format_forecast_text(s: ViewState) -> str:
    """Plain text rendering: city header, one line per day, then any error."""
    lines: list[str] = []
    if s.city_name:
        lines.append(f"=== {s.city_name} ===")
    for day in s.forecast:
        lines.append(
            f"{day.date:<18} {day.temperature}°C  {day.description} [{day.icon_id}]"
        )
    if s.error is not None:
        lines.append(f"Error: {s.error.message}")
    return "\n".join(lines)


def format_forecast_json(s: ViewState) -> str:
    data = {
        "phase": s.phase.value,
        "city_name": s.city_name,
        "forecast": [
            {
                "date": d.date,
                "temperature": d.temperature,
                "description": d.description,
                "icon_id": d.icon_id,
            }
            for d in s.forecast
        ],
        "error": (
            {"code": s.error.code.value, "message": s.error.message}
            if s.error is not None
            else None
        ),
        "search_history": list(s.search_history),
    }
    return json.dumps(data, indent=2)


def format_history(s: ViewState) -> str:
    if not s.search_history:
        return "No searches yet."
    return "\n".join(
        f"#{i} {name}" for i, name in enumerate(s.search_history, start=1)
    )
