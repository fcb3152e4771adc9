"""Version 1 of the ClassCart API."""
