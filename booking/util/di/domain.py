"""Domain layer DI providers."""

from dishka import Scope, provide

from booking.config import AuthSettings, BookingSettings
from booking.domain.repository import EventRepository, ProductRepository
from booking.domain.service import (
    ChangeOutbox,
    EventQueryService,
    EventService,
    IdentityService,
    MentorRequestService,
    PermissionService,
)
from booking.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Stateful services are REQUEST-scoped to align with the repository/session
    lifecycle: each unit of work gets its own transaction and outbox.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_permission_service(self) -> PermissionService:
        """Provide the stateless permission evaluator."""
        return PermissionService()

    @provide(scope=Scope.APP)
    def get_event_query_service(
        self, permission_service: PermissionService
    ) -> EventQueryService:
        """Provide event listing rules."""
        return EventQueryService(permission_service=permission_service)

    @provide(scope=Scope.APP)
    def get_identity_service(self, auth_settings: AuthSettings) -> IdentityService:
        """Provide identity token service."""
        return IdentityService(auth_settings=auth_settings)

    @provide
    def get_mentor_request_service(
        self,
        event_repository: EventRepository,
        permission_service: PermissionService,
        outbox: ChangeOutbox,
        settings: BookingSettings,
    ) -> MentorRequestService:
        """Provide mentor request protocol service."""
        return MentorRequestService(
            event_repository=event_repository,
            permission_service=permission_service,
            outbox=outbox,
            settings=settings,
        )

    @provide
    def get_event_service(
        self,
        event_repository: EventRepository,
        product_repository: ProductRepository,
        permission_service: PermissionService,
        outbox: ChangeOutbox,
        settings: BookingSettings,
    ) -> EventService:
        """Provide event lifecycle service."""
        return EventService(
            event_repository=event_repository,
            product_repository=product_repository,
            permission_service=permission_service,
            outbox=outbox,
            settings=settings,
        )
