from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .backend.client import BackendClient, BackendConfig
from .core.constants import DEFAULT_BACKEND_BASE_URL, DEFAULT_BACKEND_TIMEOUT, DEFAULT_PROFILE_BUCKET
from .invitations.http_invitation_repository import HttpInvitationRepository
from .rooms.http_room_repository import HttpRoomRepository
from .rooms.service import RoomService
from .shifts.http_shift_repository import HttpShiftRepository
from .shifts.service import ShiftService
from .storage.profile_pictures import SupabaseProfilePictureStorage
from .users.http_user_repository import HttpUserRepository
from .users.service import AuthService, ProfileService
from .web.session import current_token


@dataclass(frozen=True)
class Container:
    client: Optional[BackendClient]

    users_repo: object
    rooms_repo: object
    shifts_repo: object
    invitations_repo: object

    auth_service: AuthService
    profile_service: ProfileService
    room_service: RoomService
    shift_service: ShiftService


def build_services(*, users_repo, rooms_repo, shifts_repo, invitations_repo, storage=None, client=None) -> Container:
    return Container(
        client=client,
        users_repo=users_repo,
        rooms_repo=rooms_repo,
        shifts_repo=shifts_repo,
        invitations_repo=invitations_repo,
        auth_service=AuthService(users_repo),
        profile_service=ProfileService(users_repo, storage),
        room_service=RoomService(rooms_repo, shifts_repo),
        shift_service=ShiftService(shifts_repo, invitations_repo, users_repo),
    )


def build_container(*, settings) -> Container:
    config = BackendConfig(
        base_url=str(getattr(settings, "BACKEND_BASE_URL", DEFAULT_BACKEND_BASE_URL)),
        timeout=float(getattr(settings, "BACKEND_TIMEOUT", DEFAULT_BACKEND_TIMEOUT)),
    )
    client = BackendClient(config, token_provider=current_token)

    storage = None
    supabase_url = getattr(settings, "SUPABASE_URL", "")
    supabase_key = getattr(settings, "SUPABASE_KEY", "")
    if supabase_url and supabase_key:
        storage = SupabaseProfilePictureStorage(
            supabase_url,
            supabase_key,
            getattr(settings, "SUPABASE_BUCKET", DEFAULT_PROFILE_BUCKET),
        )

    return build_services(
        client=client,
        users_repo=HttpUserRepository(client),
        rooms_repo=HttpRoomRepository(client),
        shifts_repo=HttpShiftRepository(client),
        invitations_repo=HttpInvitationRepository(client),
        storage=storage,
    )
