from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.duplicate_guard import DuplicateGuard
from .attendance.eligibility import EligibilityEvaluator
from .attendance.factory import DuplicateRuleFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .audit.mysql_audit_repository import MySQLAuditLogRepository, MySQLDeletedItemRepository
from .audit.repository import AuditLogRepository, DeletedItemRepository
from .audit.service import AuditTrail, DeletionSnapshots
from .call_sessions.mysql_call_session_repository import MySQLCallSessionRepository
from .call_sessions.repository import CallSessionRepository
from .call_sessions.service import CallSessionService
from .centers.geofence import GeofenceChecker
from .centers.mysql_center_repository import MySQLCenterRepository
from .centers.repository import CenterRepository
from .centers.service import CenterService
from .common.datetime_utils import TimeService
from .core.constants import DEFAULT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.repository import SessionRepository
from .sessions.resolver import ScheduleResolver
from .sessions.service import SessionService
from .whatsapp.mysql_whatsapp_schedule_repository import MySQLWhatsAppScheduleRepository
from .whatsapp.repository import WhatsAppScheduleRepository
from .whatsapp.service import WhatsAppScheduleService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    time_service: TimeService

    centers_repo: CenterRepository
    sessions_repo: SessionRepository
    call_sessions_repo: CallSessionRepository
    attendance_repo: AttendanceRepository
    whatsapp_schedules_repo: WhatsAppScheduleRepository

    center_service: CenterService
    session_service: SessionService
    call_session_service: CallSessionService
    attendance_service: AttendanceService
    whatsapp_service: WhatsAppScheduleService


def wire_container(
    *,
    time_service: TimeService,
    centers_repo: CenterRepository,
    sessions_repo: SessionRepository,
    call_sessions_repo: CallSessionRepository,
    attendance_repo: AttendanceRepository,
    whatsapp_schedules_repo: WhatsAppScheduleRepository,
    audit_repo: Optional[AuditLogRepository] = None,
    deleted_items_repo: DeletedItemRepository,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the services on top of already constructed repositories."""

    audit = AuditTrail(audit_repo)
    snapshots = DeletionSnapshots(deleted_items_repo)
    resolver = ScheduleResolver(time_service)
    eligibility = EligibilityEvaluator(time_service)
    duplicate_guard = DuplicateGuard(attendance_repo, time_service, rule_factory=DuplicateRuleFactory())

    center_service = CenterService(centers_repo, time_service=time_service, audit=audit, snapshots=snapshots)
    session_service = SessionService(
        sessions_repo,
        centers_repo,
        time_service=time_service,
        resolver=resolver,
        eligibility=eligibility,
        duplicate_guard=duplicate_guard,
        audit=audit,
        snapshots=snapshots,
    )
    call_session_service = CallSessionService(call_sessions_repo, time_service=time_service, audit=audit)
    attendance_service = AttendanceService(
        attendance_repo,
        sessions_repo,
        centers_repo,
        call_session_service,
        time_service=time_service,
        resolver=resolver,
        eligibility=eligibility,
        duplicate_guard=duplicate_guard,
        geofence=GeofenceChecker(),
        audit=audit,
        snapshots=snapshots,
    )
    whatsapp_service = WhatsAppScheduleService(
        whatsapp_schedules_repo,
        attendance_repo,
        time_service=time_service,
        duplicate_guard=duplicate_guard,
        audit=audit,
        snapshots=snapshots,
    )

    return Container(
        conn=conn,
        time_service=time_service,
        centers_repo=centers_repo,
        sessions_repo=sessions_repo,
        call_sessions_repo=call_sessions_repo,
        attendance_repo=attendance_repo,
        whatsapp_schedules_repo=whatsapp_schedules_repo,
        center_service=center_service,
        session_service=session_service,
        call_session_service=call_session_service,
        attendance_service=attendance_service,
        whatsapp_service=whatsapp_service,
    )


def build_container(*, db_config: dict, timezone: str = DEFAULT_TIMEZONE) -> Container:
    config = DBConfig(
        host=str(db_config["host"]),
        port=int(db_config.get("port", 3306)),
        user=str(db_config["user"]),
        password=str(db_config["password"]),
        database=str(db_config["database"]),
    )
    conn = DatabaseConnection.get_instance(config)

    return wire_container(
        time_service=TimeService(timezone),
        centers_repo=MySQLCenterRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        call_sessions_repo=MySQLCallSessionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        whatsapp_schedules_repo=MySQLWhatsAppScheduleRepository(conn),
        audit_repo=MySQLAuditLogRepository(conn),
        deleted_items_repo=MySQLDeletedItemRepository(conn),
        conn=conn,
    )
