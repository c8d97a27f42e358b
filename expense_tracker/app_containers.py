from dependency_injector import containers, providers
from expense_tracker.v1_0.v1_containers import APIContainer
from expense_tracker.storage.database import async_session

class ApplicationContainer(containers.DeclarativeContainer):
    wiring_config = containers.WiringConfiguration(
        modules=[
                "expense_tracker.v1_0.routers.category_router",
                "expense_tracker.v1_0.routers.expense_router",
                "expense_tracker.v1_0.routers.analytics_router",
                "expense_tracker.v1_0.routers.preferences_router",
                "expense_tracker.v1_0.routers.receipt_router",
            ]
    )
    db_session = providers.Object(async_session)

    api_container = providers.Container(
        APIContainer
    )
