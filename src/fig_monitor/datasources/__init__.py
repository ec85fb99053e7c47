"""External data source integrations.

Each subdirectory is one data source with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    ├── client.py         # URLs, constants, response parsing
    └── {feature}.py      # Fetch functions (one per endpoint/concept)

Sources:
  - weather/  Open-Meteo archive + forecast, stitched into one daily series
  - sheets/   Google Sheets CSV export -> observation records

Adding a new datasource
-----------------------
1. Create ``datasources/{name}/`` with files above.

2. Write fetch functions on the shared session::

       from fig_monitor.services.http import session

       def fetch_something(...) -> dict[str, Any]:
           resp = session.get(API_URL, params={...})
           resp.raise_for_status()
           return resp.json()

3. Re-export public API in ``__init__.py`` with ``__all__``.

4. Wire into ``flows/refresh.py`` and add tests in ``tests/test_{name}.py``.
"""
