from typing import List, Optional

from staffmind.domain.models import Allocation, PerformanceMetric, Project, Worker


def build_advisory_prompt(
    project: Project,
    workers: List[Worker],
    allocation: Allocation,
    metric: Optional[PerformanceMetric] = None,
) -> str:
    """
    Render the narrative request for a computed allocation.

    The deterministic allocation is already decided; the model is only asked
    to explain it in a few sentences.
    """
    team = set(allocation.worker_ids)
    member_lines = []
    for worker in workers:
        marker = "*" if worker.id in team else "-"
        member_lines.append(
            f"{marker} {worker.name or worker.id} ({worker.role or 'unknown role'})\n"
            f"    Expertise: {', '.join(worker.expertise) or 'none'}\n"
            f"    Efficiency: {worker.efficiency:.0f}%  Workload: {worker.workload:.0f}%  "
            f"Availability: {worker.availability:.0f}%\n"
            f"    Performance Score: {worker.performance_score:.0f}%  "
            f"Quality Rating: {worker.quality_rating}/5"
        )

    history = ""
    if metric is not None:
        history = (
            f"\nLatest team performance ({metric.period}): efficiency {metric.efficiency:.0f}%, "
            f"quality {metric.quality:.0f}%, on-time delivery {metric.on_time_delivery:.0f}%, "
            f"utilization {metric.utilization:.0f}%, satisfaction {metric.satisfaction}/5\n"
        )

    risks = "\n".join(f"- {r}" for r in allocation.risk_factors) or "- none identified"

    return (
        "Explain this team allocation for a compliance project in at most four sentences.\n\n"
        f"Project: {project.name or project.id}\n"
        f"Framework: {project.framework}\n"
        f"Priority: {project.priority.value}\n"
        f"Complexity: {project.complexity}/10\n"
        f"Estimated Hours: {project.estimated_hours:.0f}\n"
        f"Required Expertise: {', '.join(project.required_expertise) or 'none'}\n"
        f"Deadline: {project.deadline.isoformat()}\n"
        f"Risk Level: {project.risk_level}/10\n\n"
        "Team members (* = assigned):\n"
        + "\n".join(member_lines)
        + "\n"
        + history
        + f"\nStrategy: {allocation.strategy.value}\n"
        f"Allocated hours: {allocation.allocated_hours}, estimated days: {allocation.estimated_days}, "
        f"confidence: {allocation.confidence_score}%\n"
        f"Risk factors:\n{risks}\n"
    )
