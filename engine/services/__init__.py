"""Service layer for habit statistics.

Services hold the calculations, keeping the CLI thin and focused on
argument handling and output. Layer hierarchy:
    CLI -> Services (calculations) -> calendar_days (day arithmetic)

Services should:
- Be pure functions of their arguments wherever possible
- Take and return canonical ``YYYY-MM-DD`` day strings
- Return dataclasses where a result has more than one value

Services should NOT:
- Print or format output (see rendering/)
- Return Pydantic schema objects (the CLI does the conversion)
"""
