"""Weather lookups via Open-Meteo, answered in the user's language.

Handles the "weather" (current conditions) and "forecast" (tomorrow)
commands. A spoken place name is geocoded; otherwise the location from
settings is used.
"""

import json
import urllib.parse
import urllib.request

_FORECAST_URL = "https://api.open-meteo.com/v1/forecast"
_GEOCODE_URL = "https://geocoding-api.open-meteo.com/v1/search"
_TIMEOUT = 10

# WMO weather code groups -> description per locale
_CONDITIONS = {
    "clear": {"ca": "cel serè", "es": "cielo despejado", "en": "clear skies"},
    "partly": {"ca": "parcialment ennuvolat", "es": "parcialmente nublado", "en": "partly cloudy"},
    "overcast": {"ca": "cel cobert", "es": "cielo cubierto", "en": "overcast"},
    "fog": {"ca": "boira", "es": "niebla", "en": "fog"},
    "drizzle": {"ca": "plugim", "es": "llovizna", "en": "drizzle"},
    "rain": {"ca": "pluja", "es": "lluvia", "en": "rain"},
    "snow": {"ca": "neu", "es": "nieve", "en": "snow"},
    "showers": {"ca": "xàfecs", "es": "chubascos", "en": "rain showers"},
    "storm": {"ca": "tempesta", "es": "tormenta", "en": "thunderstorms"},
    "unknown": {"ca": "condicions desconegudes", "es": "condiciones desconocidas",
                "en": "unknown conditions"},
}

_WMO_GROUPS = {
    0: "clear", 1: "clear", 2: "partly", 3: "overcast",
    45: "fog", 48: "fog",
    51: "drizzle", 53: "drizzle", 55: "drizzle", 56: "drizzle", 57: "drizzle",
    61: "rain", 63: "rain", 65: "rain", 66: "rain", 67: "rain",
    71: "snow", 73: "snow", 75: "snow", 77: "snow", 85: "snow", 86: "snow",
    80: "showers", 81: "showers", 82: "showers",
    95: "storm", 96: "storm", 99: "storm",
}

_CURRENT = {
    "ca": "Ara fa {temp} graus a {place}, amb {conditions}. Màxima de {hi} i mínima de {lo}.",
    "es": "Ahora hace {temp} grados en {place}, con {conditions}. Máxima de {hi} y mínima de {lo}.",
    "en": "It's currently {temp} degrees in {place} with {conditions}. High of {hi}, low of {lo}.",
}

_TOMORROW = {
    "ca": "Demà a {place}: {conditions}, màxima de {hi} i mínima de {lo}.",
    "es": "Mañana en {place}: {conditions}, máxima de {hi} y mínima de {lo}.",
    "en": "Tomorrow in {place}: {conditions}, high of {hi}, low of {lo}.",
}

_RAIN = {
    "ca": " Probabilitat de pluja del {precip} per cent.",
    "es": " Probabilidad de lluvia del {precip} por ciento.",
    "en": " {precip} percent chance of rain.",
}


class PlaceNotFound(LookupError):
    pass


def describe(code, locale):
    group = _WMO_GROUPS.get(code, "unknown")
    return _CONDITIONS[group].get(locale, _CONDITIONS[group]["en"])


def _get_json(url):
    with urllib.request.urlopen(url, timeout=_TIMEOUT) as resp:
        return json.loads(resp.read())


def geocode(name, locale):
    """Resolve a place name to {"name", "latitude", "longitude"}."""
    query = urllib.parse.urlencode({"name": name, "count": 1, "language": locale})
    data = _get_json(f"{_GEOCODE_URL}?{query}")
    results = data.get("results") or []
    if not results:
        raise PlaceNotFound(name)
    r = results[0]
    return {"name": r["name"], "latitude": r["latitude"], "longitude": r["longitude"]}


def fetch(location):
    """Current conditions and a 2-day daily forecast for a location."""
    query = urllib.parse.urlencode({
        "latitude": location["latitude"],
        "longitude": location["longitude"],
        "current": "temperature_2m,weather_code",
        "daily": "weather_code,temperature_2m_max,temperature_2m_min,"
                 "precipitation_probability_max",
        "timezone": "auto",
        "forecast_days": 2,
    })
    return _get_json(f"{_FORECAST_URL}?{query}")


def report(data, place, locale, tomorrow=False):
    """Turn an Open-Meteo response into one localized sentence."""
    daily = data["daily"]
    day = 1 if tomorrow else 0
    hi = round(daily["temperature_2m_max"][day])
    lo = round(daily["temperature_2m_min"][day])
    precip = daily["precipitation_probability_max"][day] or 0

    if tomorrow:
        text = _TOMORROW[locale].format(
            place=place, conditions=describe(daily["weather_code"][day], locale), hi=hi, lo=lo)
    else:
        current = data["current"]
        text = _CURRENT[locale].format(
            temp=round(current["temperature_2m"]), place=place,
            conditions=describe(current["weather_code"], locale), hi=hi, lo=lo)
    if precip > 20:
        text += _RAIN[locale].format(precip=precip)
    return text


def weather_report(default_location, locale, place=None, tomorrow=False):
    """Look up and describe the weather. Network errors propagate to the caller."""
    location = geocode(place, locale) if place else default_location
    return report(fetch(location), location["name"], locale, tomorrow=tomorrow)
