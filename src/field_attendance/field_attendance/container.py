from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS, DEFAULT_MAX_IMAGE_KB, DEFAULT_TOKEN_MAX_AGE_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .distance.mysql_distance_repository import MySQLDistanceRepository
from .distance.repository import DistanceRepository
from .distance.service import DistanceService
from .integrations.mapping import GoogleMapsClient, MappingService
from .integrations.media_store import CloudinaryMediaStore, MediaStore
from .roster.model import RosterExclusions
from .roster.service import RosterService
from .users.identity import TokenIdentityProvider
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    attendance_repo: AttendanceRepository
    distance_repo: DistanceRepository

    media_store: MediaStore
    mapping: MappingService
    identity: TokenIdentityProvider

    auth_service: AuthService
    user_service: UserService
    distance_service: DistanceService
    attendance_service: AttendanceService
    roster_service: RosterService

    conn: Optional[DatabaseConnection] = None


def wire_services(
    *,
    users_repo: UserRepository,
    attendance_repo: AttendanceRepository,
    distance_repo: DistanceRepository,
    media_store: MediaStore,
    mapping: MappingService,
    identity: TokenIdentityProvider,
    exclusions: RosterExclusions,
    max_image_kb: int = DEFAULT_MAX_IMAGE_KB,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build the service graph on top of any repositories and external clients."""
    distance_service = DistanceService(distance_repo, mapping)
    return Container(
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        distance_repo=distance_repo,
        media_store=media_store,
        mapping=mapping,
        identity=identity,
        auth_service=AuthService(users_repo, identity),
        user_service=UserService(users_repo),
        distance_service=distance_service,
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            distance_service,
            media_store,
            mapping,
            max_image_kb=max_image_kb,
        ),
        roster_service=RosterService(attendance_repo, users_repo, exclusions=exclusions),
        conn=conn,
    )


def build_container(settings: Any) -> Container:
    """Production wiring: MySQL repositories, Google Maps and Cloudinary clients."""
    conn = DatabaseConnection.get_instance(DBConfig.from_settings(getattr(settings, "DB_CONFIG")))

    return wire_services(
        users_repo=MySQLUserRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        distance_repo=MySQLDistanceRepository(conn),
        media_store=CloudinaryMediaStore(
            cloud_name=getattr(settings, "CLOUDINARY_CLOUD_NAME"),
            api_key=getattr(settings, "CLOUDINARY_API_KEY"),
            api_secret=getattr(settings, "CLOUDINARY_API_SECRET"),
            timeout=float(getattr(settings, "MEDIA_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)),
        ),
        mapping=GoogleMapsClient(
            getattr(settings, "GMAP_API_KEY"),
            timeout=float(getattr(settings, "MAPS_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS)),
        ),
        identity=TokenIdentityProvider(
            getattr(settings, "SECRET_KEY"),
            max_age_days=int(getattr(settings, "TOKEN_MAX_AGE_DAYS", DEFAULT_TOKEN_MAX_AGE_DAYS)),
        ),
        exclusions=RosterExclusions.of(
            emails=getattr(settings, "ROSTER_EXCLUDED_EMAILS", ()),
            regions=getattr(settings, "ROSTER_EXCLUDED_REGIONS", ()),
        ),
        max_image_kb=int(getattr(settings, "MAX_IMAGE_KB", DEFAULT_MAX_IMAGE_KB)),
        conn=conn,
    )
