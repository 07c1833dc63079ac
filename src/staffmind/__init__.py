"""
StaffMind - Resource Allocation & Workload Rebalancing Engine

This package contains the StaffMind backend services:
- schedulers: Scoring, team selection, capacity forecasting, workload balance
- triggers: Rebalancing rule engine (JSONLogic conditions, advisory actions)
- storage: Allocation store adapters (in-memory, SQLAlchemy)
- advisory: Optional narrative enrichment via an LLM provider
- engine: Caller-facing allocation service and roster collaborator
- api: FastAPI REST endpoints
- platform: Cross-cutting concerns (config, logging, metrics)
"""

__version__ = "0.1.0"
