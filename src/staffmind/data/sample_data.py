"""
Sample roster used by the API when no external roster is wired in.
"""

from datetime import date
from typing import List

from staffmind.domain.models import PerformanceMetric, Priority, Project, ProjectStatus, Worker


def sample_workers() -> List[Worker]:
    return [
        Worker(
            id="tm-001",
            name="Sarah Chen",
            role="Senior QA Engineer",
            expertise=["ISO 13485", "FDA QSR", "Risk Management"],
            efficiency=92,
            workload=75,
            availability=85,
            performance_score=94,
            quality_rating=4.8,
            average_completion_hours=18,
            completed_audits=28,
        ),
        Worker(
            id="tm-002",
            name="Marcus Johnson",
            role="Regulatory Affairs Manager",
            expertise=["EU MDR", "ISO 13485", "Clinical Data"],
            efficiency=88,
            workload=65,
            availability=90,
            performance_score=91,
            quality_rating=4.6,
            average_completion_hours=22,
            completed_audits=22,
        ),
        Worker(
            id="tm-003",
            name="Emily Rodriguez",
            role="Compliance Specialist",
            expertise=["FDA QSR", "HIPAA", "Quality Systems"],
            efficiency=85,
            workload=80,
            availability=70,
            performance_score=87,
            quality_rating=4.7,
            average_completion_hours=16,
            completed_audits=31,
        ),
    ]


def sample_projects() -> List[Project]:
    return [
        Project(
            id="proj-001",
            name="MedDevice Pro Certification",
            framework="ISO 13485",
            priority=Priority.HIGH,
            complexity=8,
            estimated_hours=120,
            deadline=date(2024, 2, 15),
            required_expertise=["ISO 13485", "Risk Management", "Quality Systems"],
            risk_level=6,
            status=ProjectStatus.PENDING,
        ),
        Project(
            id="proj-002",
            name="FDA 510(k) Submission Review",
            framework="FDA QSR",
            priority=Priority.CRITICAL,
            complexity=9,
            estimated_hours=180,
            deadline=date(2024, 1, 30),
            required_expertise=["FDA QSR", "Clinical Data", "Risk Management"],
            risk_level=8,
            status=ProjectStatus.PENDING,
        ),
    ]


def sample_metrics() -> List[PerformanceMetric]:
    return [
        PerformanceMetric(period="Q3 2023", efficiency=88, quality=92, on_time_delivery=94, utilization=82, satisfaction=4.6),
        PerformanceMetric(period="Q4 2023", efficiency=91, quality=94, on_time_delivery=96, utilization=85, satisfaction=4.7),
    ]
