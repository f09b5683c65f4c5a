"""Demo tickets loaded into fresh storage when ``seed_sample_data`` is on."""

from datetime import UTC, datetime

from ticketify.models.entities import TicketEntity


def _day(value: str) -> datetime:
    return datetime.fromisoformat(value).replace(tzinfo=UTC)


def sample_tickets() -> list[TicketEntity]:
    return [
        TicketEntity(
            id="1",
            ticket_id="TCK-001",
            title="Implement user authentication",
            description="Add login and registration functionality",
            priority="HIGH",
            status="SCHEDULED",
            category="Feature",
            deadline=_day("2025-12-31"),
            created_at=_day("2025-11-01"),
            updated_at=_day("2025-11-01"),
            csam_name="John Doe",
            tpid="TP-001",
            agreement_id="AGR-001",
            customer_name="Acme Corp",
            customer_type="ENTERPRISE",
            assigned_to="user-1",
            tags=["auth", "security"],
        ),
        TicketEntity(
            id="2",
            ticket_id="TCK-002",
            title="Fix payment processing bug",
            description="Payment gateway integration issue",
            priority="URGENT",
            status="IN_PROGRESS",
            category="Bug",
            deadline=_day("2025-11-20"),
            created_at=_day("2025-11-05"),
            updated_at=_day("2025-11-10"),
            csam_name="Jane Smith",
            tpid="TP-002",
            agreement_id="AGR-002",
            customer_name="Tech Startup",
            customer_type="STARTUP",
            assigned_to="user-2",
            tags=["payment", "bug"],
        ),
        TicketEntity(
            id="3",
            ticket_id="TCK-003",
            title="Design new dashboard UI",
            description="Create modern dashboard interface",
            priority="MEDIUM",
            status="ACTIVE",
            category="Design",
            deadline=_day("2025-12-15"),
            created_at=_day("2025-11-08"),
            updated_at=_day("2025-11-12"),
            csam_name="Bob Johnson",
            tpid="TP-003",
            agreement_id="AGR-003",
            customer_name="SMB Inc",
            customer_type="SMB",
            tags=["design", "ui"],
        ),
        TicketEntity(
            id="4",
            ticket_id="TCK-004",
            title="Update API documentation",
            description="Document all API endpoints",
            priority="LOW",
            status="OVERDUE",
            category="Documentation",
            deadline=_day("2025-11-10"),
            created_at=_day("2025-10-20"),
            updated_at=_day("2025-11-10"),
            csam_name="Alice Williams",
            tpid="TP-004",
            agreement_id="AGR-004",
            customer_name="Dev Corp",
            customer_type="ENTERPRISE",
            assigned_to="user-3",
            tags=["docs", "api"],
        ),
        TicketEntity(
            id="5",
            ticket_id="TCK-005",
            title="Setup CI/CD pipeline",
            description="Configure automated deployment",
            priority="HIGH",
            status="COMPLETED",
            category="DevOps",
            deadline=_day("2025-11-15"),
            completed_at=_day("2025-11-14"),
            created_at=_day("2025-10-25"),
            updated_at=_day("2025-11-14"),
            csam_name="Charlie Brown",
            tpid="TP-005",
            agreement_id="AGR-005",
            customer_name="Cloud Services",
            customer_type="ENTERPRISE",
            assigned_to="user-1",
            tags=["ci-cd", "devops"],
        ),
    ]
