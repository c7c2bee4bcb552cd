from typing import Any, Callable, Dict, Iterator, Type, TypeVar, cast

from fastapi import Depends, Request

from taskvibe.storage import EntityStore

# Type variable for service classes
T = TypeVar("T")

# Global registry of service factories
_service_registry: Dict[Type[Any], Callable[..., Any]] = {}


def get_store(request: Request) -> Iterator[EntityStore]:
    """
    Open the application's entity store for the duration of one request.

    The provider lives on ``app.state`` so each application (and each test)
    owns its own store.
    """
    with request.app.state.store_provider() as store:
        yield store


def register_service(service_class: Type[T], factory: Callable[..., T]) -> None:
    """
    Register a service factory function.

    Args:
        service_class: The class of the service
        factory: Function that creates an instance of the service from a store
    """
    _service_registry[service_class] = factory


def get_service(service_class: Type[T]) -> Callable[..., T]:
    """
    Get a dependency provider for a service.

    Services that were never registered get a default factory that passes
    the store to the constructor. One instance is created per request and
    cached on the request state.

    Args:
        service_class: The class of the service to provide

    Returns:
        A FastAPI dependency that provides the service
    """
    if service_class not in _service_registry:
        register_service(service_class, lambda store: service_class(store))

    def _get_service(request: Request, store: EntityStore = Depends(get_store)) -> T:
        service_key = f"service:{service_class.__name__}"
        if hasattr(request.state, service_key):
            return cast(T, getattr(request.state, service_key))

        service = _service_registry[service_class](store)
        setattr(request.state, service_key, service)
        return service

    return _get_service
