generate_plan_description = """
Generate a course plan from the module feed, the start date, the turn (shift) and the region

### Request Body

- `modules`: List of `ModuleFeedItem` objects, in certificate order:
    - `id`: Primary key of the module
    - `codigo`: Module code (e.g. "MF1330_1")
    - `horasTotal`: Declared duration in hours
    - `titulo`: Title of the module (Optional)

- `startDate`: First candidate day (YYYY-MM-DD)

- `shift`: `ShiftSettings` object: (Optional, defaults to the "manana" turn)
    - `turno`: Named preset ("manana", "tarde", "completo")
    - `horaInicio` / `horaFin`: Shift hours ("08:00" or 8)
    - `horasPorDia`: Fixed hours per day, takes precedence over the shift hours
    - `permitirFinde`: Allow sessions on weekends
    - `permitirFestivos`: Allow sessions on holidays
    - `esTurno24h`: 24h turn

- `region`: `RegionSettings` object: (Optional)
    - `region`: Region code (e.g. "canarias", "madrid")
    - `subregion`: Island code, required for "canarias"
    - `startYear` / `endYear`: Holiday window; defaults to the academic years of `startDate`
    - `festivosPersonalizados`: Extra holiday dates

### Response

- `plan`: Modules with their `sesiones` (`moduloId`, `fecha`, `horas`)
- `sessions`: Flat list of sessions
- `summary`: Per-module summary
- `issues`: Coherence issues (`ruleId`, `severity`, `message`, `date`, `moduleId`, `moduleCodes`)
- `metrics`: Dashboard metrics
"""

move_module_description = """
Move a module's start date and recalculate every later module in cascade

The moved module is regenerated from `newStartDate`; every module after it starts on the
first working day after the previous module's last session. Modules before it are unchanged.
The stored plan is not modified: confirm with the user using `affectedCount` before committing
the returned plan.

### Request Body

- `plan`: Current plan (as returned by `/plan/generate`)
- `moduleId`: Module to move
- `newStartDate`: New start date (YYYY-MM-DD)
- `shift`, `region`: Same as `/plan/generate`
"""

verify_plan_description = """
Check a plan for overlaps, days over capacity, hour mismatches and sessions on
weekends/holidays that the turn does not allow. All checks always run.
"""

plan_metrics_description = """
Summary figures of a plan: span, working days, average hours per week and date range per module.
"""
