"""
Resource Allocation Service - caller-facing orchestration.

Ties the roster, the selector, the balance analysis, the rebalancing rules
and the allocation store together. All entry points are async; allocation
for a given project is serialized, different projects run concurrently.
"""

import asyncio
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple, Union
import logging
import weakref

from staffmind.advisory import AdvisoryProvider, build_advisory_prompt
from staffmind.domain.models import Allocation, AllocationStrategy, ProjectStatus
from staffmind.errors import AdvisoryServiceUnavailable, ProjectNotFound, StaleAllocationError
from staffmind.platform.config import Settings, get_settings
from staffmind.platform.metrics import (
    ADVISORY_FALLBACKS_TOTAL,
    ALLOCATIONS_TOTAL,
    REBALANCE_ACTIONS_TOTAL,
)
from staffmind.schedulers import (
    AllocationAnalytics,
    AllocationSelector,
    CapacityForecast,
    CapacityForecaster,
    FrameworkCapacity,
    InsightGenerator,
    PredictiveInsight,
    WorkloadBalance,
    WorkloadBalanceAnalyzer,
)
from staffmind.schedulers.base import utcnow
from staffmind.storage.base import AllocationStore
from staffmind.triggers import AllocationRule, RebalanceResult, RebalancingRuleEngine, RuleRepository
from staffmind.triggers.actions.base import RebalanceSnapshot

from .roster import RosterProvider

logger = logging.getLogger(__name__)


class ResourceAllocationService:
    """
    Service layer for allocation, forecasting and rebalancing.

    This service ensures that:
    1. At most one allocation is stored per project (recompute replaces)
    2. Nothing is written when selection or the store fails
    3. The advisory narrative never decides the outcome
    """

    def __init__(
        self,
        roster: RosterProvider,
        store: AllocationStore,
        rules: Optional[RuleRepository] = None,
        advisor: Optional[AdvisoryProvider] = None,
        settings: Optional[Settings] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.roster = roster
        self.store = store
        self.rules = rules or RuleRepository()
        self.advisor = advisor
        self.settings = settings or get_settings()
        self.clock = clock or utcnow

        self.selector = AllocationSelector(self.settings, self.clock)
        self.analyzer = WorkloadBalanceAnalyzer(self.settings, self.clock)
        self.forecaster = CapacityForecaster(self.settings, self.clock)
        self.insight_generator = InsightGenerator(self.settings, self.clock)
        self.rule_engine = RebalancingRuleEngine(self.rules, relief_factor=self.settings.RELIEF_FACTOR)

        # Entries drop out once no allocate call holds or awaits the lock
        self._project_locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = weakref.WeakValueDictionary()
        self._snapshot_lock = asyncio.Lock()

    def _lock_for(self, project_id: str) -> asyncio.Lock:
        lock = self._project_locks.get(project_id)
        if lock is None:
            lock = asyncio.Lock()
            self._project_locks[project_id] = lock
        return lock

    # --- Allocation ---

    async def allocate(
        self,
        project_id: str,
        strategy: Union[str, AllocationStrategy] = AllocationStrategy.BALANCED,
    ) -> Allocation:
        """
        Compute, store and return the allocation for a project.

        Any existing allocation for the project is replaced. A pending
        project moves to assigned once the allocation is stored.

        Raises:
            ProjectNotFound: Unknown project id
            InvalidStrategy: Unknown strategy
            NoEligibleWorkers: Nobody can be assigned
            StoreUnavailable: The store write failed; nothing was written
        """
        async with self._lock_for(project_id):
            project = self.roster.get_project(project_id)
            if project is None:
                raise ProjectNotFound(project_id)

            workers = self.roster.list_workers()
            allocation = self.selector.select(project, workers, strategy)

            if self.advisor is not None:
                allocation = await self._enrich(allocation, project, workers)

            self.store.put(allocation)

            if project.status == ProjectStatus.PENDING:
                self.roster.update_project_status(project_id, ProjectStatus.ASSIGNED)

            ALLOCATIONS_TOTAL.labels(strategy=allocation.strategy.value).inc()
            logger.info(
                f"Stored allocation for {project_id}: {allocation.worker_ids} "
                f"({allocation.confidence_score}% confidence)"
            )
            return allocation

    async def _enrich(self, allocation: Allocation, project, workers) -> Allocation:
        metrics = self.roster.list_metrics()
        prompt = build_advisory_prompt(project, workers, allocation, metrics[-1] if metrics else None)

        try:
            summary = await asyncio.wait_for(
                self.advisor.advise(prompt),
                timeout=self.settings.ADVISORY_TIMEOUT_SECONDS,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Advisory service timed out for {project.id}; using deterministic output")
            ADVISORY_FALLBACKS_TOTAL.inc()
            return allocation.model_copy(update={"advisory_degraded": True})
        except AdvisoryServiceUnavailable as e:
            logger.warning(f"Advisory service unavailable for {project.id}: {e}")
            ADVISORY_FALLBACKS_TOTAL.inc()
            return allocation.model_copy(update={"advisory_degraded": True})
        except Exception as e:
            logger.warning(f"Advisory provider failed for {project.id}: {e}", exc_info=True)
            ADVISORY_FALLBACKS_TOTAL.inc()
            return allocation.model_copy(update={"advisory_degraded": True})

        return allocation.model_copy(update={
            "advisory_summary": summary,
            "recommendations": allocation.recommendations + [summary],
        })

    def get_allocation(self, project_id: str) -> Optional[Allocation]:
        return self.store.get(project_id)

    def list_allocations(self) -> List[Allocation]:
        return self.store.list()

    # --- Analysis ---

    async def _snapshot(self) -> RebalanceSnapshot:
        async with self._snapshot_lock:
            workers = self.roster.list_workers()
            projects = self.roster.list_projects()
            allocations = self.store.list()

        balances, capacities = self.analyzer.analyze(workers, projects, allocations)
        return RebalanceSnapshot(
            workers=workers,
            projects=projects,
            allocations=allocations,
            balances=balances,
            capacities=capacities,
        )

    async def analyze_balance(self) -> Tuple[List[WorkloadBalance], List[FrameworkCapacity]]:
        snapshot = await self._snapshot()
        return snapshot.balances, snapshot.capacities

    async def forecast(self, horizon_weeks: Optional[int] = None) -> List[CapacityForecast]:
        snapshot = await self._snapshot()
        return self.forecaster.forecast(
            snapshot.workers,
            snapshot.projects,
            snapshot.balances,
            horizon_weeks,
        )

    async def insights(self) -> List[PredictiveInsight]:
        snapshot = await self._snapshot()
        return self.insight_generator.generate_insights(snapshot.balances, snapshot.capacities)

    async def analytics(self) -> AllocationAnalytics:
        snapshot = await self._snapshot()
        return self.insight_generator.analytics(
            snapshot.allocations,
            snapshot.workers,
            snapshot.capacities,
            rule_success_rates=[r.success_rate for r in self.rules.list_enabled()],
            metrics=self.roster.list_metrics(),
        )

    # --- Rebalancing ---

    async def rebalance(self) -> RebalanceResult:
        """
        Run one rebalancing pass.

        Relief is advisory: adjusted loads in the result are estimates and
        the roster is never changed. Action text is appended to the stored
        allocation of any project an action names.
        """
        snapshot = await self._snapshot()
        result = await self.rule_engine.evaluate(snapshot)

        for action in result.actions:
            REBALANCE_ACTIONS_TOTAL.labels(rule=action.rule_id).inc()

        notes: Dict[str, List[str]] = {}
        for action in result.actions:
            if action.project_id:
                notes.setdefault(action.project_id, []).append(action.description)

        for project_id in sorted(notes):
            await self._annotate(project_id, notes[project_id])

        return result

    async def _annotate(self, project_id: str, descriptions: List[str]) -> None:
        async with self._lock_for(project_id):
            version = self.store.version(project_id)
            allocation = self.store.get(project_id)
            if allocation is None:
                return

            recommendations = list(allocation.recommendations)
            for text in descriptions:
                if text not in recommendations:
                    recommendations.append(text)
            if recommendations == allocation.recommendations:
                return

            updated = allocation.model_copy(update={"recommendations": recommendations})
            try:
                self.store.put(updated, expected_version=version)
            except StaleAllocationError:
                # Allocation replaced concurrently; the next pass re-annotates it
                logger.warning(f"Skipped rebalance note for {project_id}: allocation changed")

    def set_rule_enabled(self, rule_id: str, enabled: bool) -> AllocationRule:
        rule = self.rules.set_enabled(rule_id, enabled)
        logger.info(f"Rule {rule_id} {'enabled' if enabled else 'disabled'}")
        return rule

    def list_rules(self) -> List[AllocationRule]:
        return self.rules.list()

    # --- Refresh ---

    async def recompute(self) -> Dict[str, Any]:
        """
        Explicit refresh: re-derive every stored allocation of an open
        project with its stored strategy, then re-run the balance analysis.

        Repeated calls with unchanged inputs and clock yield the same state.
        """
        projects = {p.id: p for p in self.roster.list_projects()}
        refreshed = []
        for allocation in self.store.list():
            project = projects.get(allocation.project_id)
            if project is None or not project.is_open:
                continue
            await self.allocate(project.id, allocation.strategy)
            refreshed.append(project.id)

        balances, capacities = await self.analyze_balance()
        logger.info(f"Recompute refreshed {len(refreshed)} allocation(s)")
        return {
            "refreshed": refreshed,
            "balances": balances,
            "capacities": capacities,
        }
