from dependency_injector import containers, providers
from expense_tracker.v1_0.repositories import (
    CategoryRepository,
    ExpenseRepository,
    )
from expense_tracker.v1_0.services import (
    CategoryService,
    ExpenseService,
    AnalyticsService,
    PreferencesService,
    ReceiptService,
    )
from expense_tracker.storage.cloud_storage import CloudStorageService
from expense_tracker.storage.document_store import PreferencesStore

class APIContainer(containers.DeclarativeContainer):
    category_repository = providers.Singleton(CategoryRepository)
    expense_repository = providers.Singleton(ExpenseRepository)

    category_service = providers.Singleton(
        CategoryService,
        category_repository = category_repository
    )
    expense_service = providers.Singleton(
        ExpenseService,
        expense_repository = expense_repository,
        category_repository = category_repository
    )
    analytics_service = providers.Singleton(
        AnalyticsService,
        expense_repository = expense_repository
    )
    preferences_store = providers.Singleton(PreferencesStore)
    preferences_service = providers.Factory(
        PreferencesService,
        store=preferences_store,
    )
    cloud_storage_service = providers.Singleton(CloudStorageService)
    receipt_service = providers.Factory(
        ReceiptService,
        storage=cloud_storage_service,
    )
