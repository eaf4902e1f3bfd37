"""Application layer DI providers."""

from dishka import Scope, provide

from booking.application.usecase.event import (
    CreateEventUseCase,
    DeleteEventUseCase,
    GetEventUseCase,
    ListEventsUseCase,
    SetEventLockUseCase,
    UpdateEventUseCase,
)
from booking.application.usecase.request import (
    DecideRequestUseCase,
    RequestMentorUseCase,
    WithdrawRequestUseCase,
)
from booking.application.usecase.session import GetSessionUseCase, ResolveActorUseCase
from booking.domain.service import (
    EventQueryService,
    EventService,
    IdentityService,
    MentorRequestService,
    PermissionService,
)
from booking.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Event use cases
    @provide(scope=Scope.REQUEST)
    def get_create_event_use_case(
        self, event_service: EventService, permission_service: PermissionService
    ) -> CreateEventUseCase:
        """Provide create event use case."""
        return CreateEventUseCase(
            event_service=event_service, permission_service=permission_service
        )

    @provide(scope=Scope.REQUEST)
    def get_update_event_use_case(
        self, event_service: EventService, permission_service: PermissionService
    ) -> UpdateEventUseCase:
        """Provide update event use case."""
        return UpdateEventUseCase(
            event_service=event_service, permission_service=permission_service
        )

    @provide(scope=Scope.REQUEST)
    def get_set_event_lock_use_case(
        self, event_service: EventService, permission_service: PermissionService
    ) -> SetEventLockUseCase:
        """Provide set event lock use case."""
        return SetEventLockUseCase(
            event_service=event_service, permission_service=permission_service
        )

    @provide(scope=Scope.REQUEST)
    def get_delete_event_use_case(
        self, event_service: EventService
    ) -> DeleteEventUseCase:
        """Provide delete event use case."""
        return DeleteEventUseCase(event_service=event_service)

    @provide(scope=Scope.REQUEST)
    def get_get_event_use_case(
        self, event_service: EventService, permission_service: PermissionService
    ) -> GetEventUseCase:
        """Provide get event use case."""
        return GetEventUseCase(
            event_service=event_service, permission_service=permission_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_events_use_case(
        self,
        event_service: EventService,
        event_query_service: EventQueryService,
        permission_service: PermissionService,
    ) -> ListEventsUseCase:
        """Provide list events use case."""
        return ListEventsUseCase(
            event_service=event_service,
            event_query_service=event_query_service,
            permission_service=permission_service,
        )

    # Mentor request use cases
    @provide(scope=Scope.REQUEST)
    def get_request_mentor_use_case(
        self,
        mentor_request_service: MentorRequestService,
        event_service: EventService,
        permission_service: PermissionService,
    ) -> RequestMentorUseCase:
        """Provide request mentor use case."""
        return RequestMentorUseCase(
            mentor_request_service=mentor_request_service,
            event_service=event_service,
            permission_service=permission_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_withdraw_request_use_case(
        self,
        mentor_request_service: MentorRequestService,
        permission_service: PermissionService,
    ) -> WithdrawRequestUseCase:
        """Provide withdraw request use case."""
        return WithdrawRequestUseCase(
            mentor_request_service=mentor_request_service,
            permission_service=permission_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_decide_request_use_case(
        self,
        mentor_request_service: MentorRequestService,
        permission_service: PermissionService,
    ) -> DecideRequestUseCase:
        """Provide accept/decline/assign use case."""
        return DecideRequestUseCase(
            mentor_request_service=mentor_request_service,
            permission_service=permission_service,
        )

    # Session use cases
    @provide(scope=Scope.REQUEST)
    def get_resolve_actor_use_case(
        self,
        identity_service: IdentityService,
        permission_service: PermissionService,
    ) -> ResolveActorUseCase:
        """Provide resolve actor use case."""
        return ResolveActorUseCase(
            identity_service=identity_service, permission_service=permission_service
        )

    @provide(scope=Scope.REQUEST)
    def get_get_session_use_case(
        self, permission_service: PermissionService
    ) -> GetSessionUseCase:
        """Provide get session use case."""
        return GetSessionUseCase(permission_service=permission_service)
