"""
Roster / catalog collaborator.

Supplies workers, projects and historical performance metrics. The engine
only ever writes project status.
"""

import threading
from typing import Dict, Iterable, List, Optional, Protocol

from staffmind.domain.models import PerformanceMetric, Project, ProjectStatus, Worker


class RosterProvider(Protocol):
    def list_workers(self) -> List[Worker]:
        ...

    def list_projects(self) -> List[Project]:
        ...

    def get_project(self, project_id: str) -> Optional[Project]:
        ...

    def update_project_status(self, project_id: str, status: ProjectStatus) -> Project:
        ...

    def list_metrics(self) -> List[PerformanceMetric]:
        ...


class InMemoryRoster:
    """Roster held in process memory, ordered as supplied."""

    def __init__(
        self,
        workers: Iterable[Worker] = (),
        projects: Iterable[Project] = (),
        metrics: Iterable[PerformanceMetric] = (),
    ):
        self._lock = threading.Lock()
        self._workers: List[Worker] = list(workers)
        self._projects: Dict[str, Project] = {p.id: p for p in projects}
        self._metrics: List[PerformanceMetric] = list(metrics)

    def list_workers(self) -> List[Worker]:
        with self._lock:
            return list(self._workers)

    def list_projects(self) -> List[Project]:
        with self._lock:
            return list(self._projects.values())

    def get_project(self, project_id: str) -> Optional[Project]:
        with self._lock:
            return self._projects.get(project_id)

    def update_project_status(self, project_id: str, status: ProjectStatus) -> Project:
        with self._lock:
            project = self._projects.get(project_id)
            if project is None:
                raise KeyError(f"Project {project_id} not found")
            updated = project.model_copy(update={"status": status})
            self._projects[project_id] = updated
            return updated

    def list_metrics(self) -> List[PerformanceMetric]:
        with self._lock:
            return list(self._metrics)
