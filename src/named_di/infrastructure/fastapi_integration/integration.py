import functools
import inspect
from typing import Any, Awaitable, Callable, Mapping, Optional

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from named_di.domain import IContainer, parse_descriptor


def create_fastapi_dependency(
    container: IContainer,
    name: str,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Callable[[], Any]:
    """Create a FastAPI Depends() callable that resolves a name from the container.

    The resolved value follows the lifecycle of its registration.

    Args:
        container: The container to resolve from.
        name: The name to resolve when the dependency is called.
        overrides: Optional values passed to every resolution.

    Returns:
        A callable that FastAPI can use with Depends().

    Example:
        >>> container = Container()
        >>> container.service("userRepository", UserRepository, ["database"])
        >>>
        >>> get_user_repo = create_fastapi_dependency(container, "userRepository")
        >>>
        >>> @app.get("/users")
        >>> async def list_users(repo: UserRepository = Depends(get_user_repo)):
        ...     return await repo.get_all()
    """

    def dependency() -> Any:
        """Resolve the dependency from the container."""
        return container.get(name, overrides)

    return dependency


def create_spawned_dependency(name: str) -> Callable[[Request], Any]:
    """Create a FastAPI dependency that resolves from the request's spawned container.

    Requires the SpawnedContainerMiddleware to be installed.

    Args:
        name: The name to resolve from the request container.

    Returns:
        A callable that resolves from the per-request container.

    Example:
        >>> app.add_middleware(SpawnedContainerMiddleware, container=container)
        >>>
        >>> get_request_context = create_spawned_dependency("requestContext")
        >>>
        >>> @app.get("/process")
        >>> async def process_request(ctx=Depends(get_request_context)):
        ...     return {"request_id": ctx.request_id}
    """

    def spawned_dependency(request: Request) -> Any:
        """Resolve from the request's spawned container."""
        if not hasattr(request.state, "di_container"):
            raise RuntimeError(
                "Request does not have a spawned DI container. Did you forget to add SpawnedContainerMiddleware?"
            )
        request_container: IContainer = request.state.di_container
        return request_container.get(name)

    return spawned_dependency


class SpawnedContainerMiddleware(BaseHTTPMiddleware):
    """Middleware that spawns a child container for each request.

    The child is accessible via `request.state.di_container`. Values with the
    CLASS or NONE lifecycle are built per request; APPLICATION values are
    shared with the parent when the child inherits.

    Attributes:
        container: The parent container to spawn from.
        inherit: Whether request containers inherit the parent's registrations.
    """

    def __init__(self, app: FastAPI, container: IContainer, inherit: bool = True):
        """Initialize the middleware with a parent container.

        Args:
            app: The FastAPI/Starlette application.
            container: The parent container to spawn from.
            inherit: Whether request containers inherit the parent's registrations.
        """
        super().__init__(app)
        self.container = container
        self.inherit = inherit

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        """Spawn a container for the request and execute the endpoint.

        Args:
            request: The incoming HTTP request.
            call_next: The next middleware or endpoint handler.

        Returns:
            The response from the endpoint.
        """
        request_container = self.container.spawn(self.inherit)
        request.state.di_container = request_container

        try:
            response = await call_next(request)
            return response
        finally:
            request_container.clear_cache()


def inject_dependencies(container: IContainer, descriptor: Any) -> Callable:
    """Decorator that injects resolved values into an endpoint as keyword arguments.

    Injected parameters are hidden from the endpoint signature so FastAPI does
    not treat them as request parameters.

    Args:
        container: The container to resolve from.
        descriptor: A name, a list of names or a mapping of alias -> name.
            Aliases (or names) must match parameter names of the endpoint.

    Returns:
        A decorator function.

    Example:
        >>> @app.get("/users")
        >>> @inject_dependencies(container, {"users": "userService", "log": "logger"})
        >>> async def list_users(users, log):
        ...     log.info("Listing users")
        ...     return await users.get_all()
    """
    parsed = parse_descriptor(descriptor)
    aliases = [alias for alias, _ in parsed.bindings()]

    def decorator(func: Callable) -> Callable:
        """Wrap the function with dependency injection logic."""
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            """Resolve dependencies and call the original function."""
            for alias, value in container.inject(parsed).items():
                kwargs.setdefault(alias, value)

            result = func(*args, **kwargs)
            if inspect.isawaitable(result):
                result = await result
            return result

        wrapper.__signature__ = signature.replace(
            parameters=[param for param in signature.parameters.values() if param.name not in aliases]
        )
        return wrapper

    return decorator
