"""
Prefect flows for the monitoring pipeline.

Flows:
- refresh: Load stored observations (seeding from the default sheet when
  empty) and fetch weather for their date span

Usage (local):
    python -m fig_monitor.flows.refresh

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    python -m fig_monitor.flows.refresh
"""
