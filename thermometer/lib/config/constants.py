"""Shared constants for the configuration module.

These constants are separated to avoid circular imports between settings.py
and the modules that need the defaults without loading the environment.
"""

# Half-width of the band around a trigger value that counts as "at" it
DEFAULT_TOLERANCE = 0.5  # Celsius

# Open-Meteo current conditions endpoint (returns current.temperature_2m)
DEFAULT_FETCH_URL = (
    "https://api.open-meteo.com/v1/forecast"
    "?latitude=47.5835702&longitude=-122.136270&current=temperature_2m"
)
