from typing import Dict, List, Optional

from pydantic import BaseModel

from staffmind.domain.models import BurnoutRisk

# --- Balance ---

class WorkloadBalanceResponse(BaseModel):
    worker_id: str
    current_load: float
    optimal_load: float
    utilization_gap: float
    burnout_risk: BurnoutRisk
    efficiency: float
    framework_distribution: Dict[str, int]
    utilization_trend: List[float]
    rebalance_recommendations: List[str]

    class Config:
        from_attributes = True

class FrameworkCapacityResponse(BaseModel):
    name: str
    total_projects: int
    active_projects: int
    team_utilization: float
    expertise_gap: float
    demand_trend: float
    critical_path: bool
    expert_count: int

    class Config:
        from_attributes = True

class BalanceResponse(BaseModel):
    balances: List[WorkloadBalanceResponse]
    capacities: List[FrameworkCapacityResponse]

# --- Forecast ---

class CapacityForecastResponse(BaseModel):
    worker_id: str
    current_capacity: float
    projected_capacity: List[float]
    skill_gaps: List[str]
    development_needs: List[str]

    class Config:
        from_attributes = True

# --- Rebalance ---

class RebalanceActionResponse(BaseModel):
    rule_id: str
    rule_kind: str
    description: str
    framework: Optional[str] = None
    project_id: Optional[str] = None
    relieved_worker_ids: List[str]
    target_worker_ids: List[str]

    class Config:
        from_attributes = True

class RebalanceResponse(BaseModel):
    actions_applied: List[str]
    actions: List[RebalanceActionResponse]
    fired_rules: List[str]
    adjusted_balances: List[WorkloadBalanceResponse]

    class Config:
        from_attributes = True

# --- Insights ---

class InsightResponse(BaseModel):
    type: str
    title: str
    description: str
    impact: str
    timeframe: str
    actionable: bool

    class Config:
        from_attributes = True

class AnalyticsResponse(BaseModel):
    total_allocations: int
    success_rate: float
    avg_confidence_score: float
    resource_utilization: float
    bottlenecks: List[str]
    trends: Dict[str, float]

    class Config:
        from_attributes = True
