"""Dependency injection container for the backend server."""

from dependency_injector import containers, providers

from app.config import Settings
from app.services.health_service import HealthService
from app.services.metrics_service import MetricsService
from app.utils.lifecycle_coordinator import LifecycleCoordinator


class ServiceContainer(containers.DeclarativeContainer):
    """Container for service dependency injection."""

    config = providers.Dependency(instance_of=Settings)

    # Lifecycle coordinator - manages startup and graceful shutdown
    lifecycle_coordinator = providers.Singleton(
        LifecycleCoordinator,
        graceful_shutdown_timeout=config.provided.graceful_shutdown_timeout,
    )

    # Health service - callback registry for health checks
    health_service = providers.Singleton(
        HealthService,
        lifecycle_coordinator=lifecycle_coordinator,
        settings=config,
    )

    metrics_service = providers.Singleton(MetricsService)
