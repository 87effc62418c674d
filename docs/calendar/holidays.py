holidays_description = """
List the holidays (festivos) of a region for an inclusive range of years

### Query Parameters

- `region`: Region code (e.g. "andalucia", "canarias", "madrid")
- `subregion`: Island code, required for "canarias" and rejected for other regions
- `startYear` / `endYear`: Inclusive year range

Weekends are not listed: weekend exclusion depends on the turn (`permitirFinde`).
"""
