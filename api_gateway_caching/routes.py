import logging
import re
import typing as tp

from fastapi import FastAPI, params, routing
from starlette.routing import Mount

from .depends import EndpointCaching
from .types import AdditionalEndpointDict

logger = logging.getLogger(__name__)

_PATH_CONVERTER_RE = re.compile(r"\{(?P<name>[^}:]+):(?P<converter>[^}]+)\}")

# (полный путь, роут, зависимости роута вместе с унаследованными)
AppRoute = tp.Tuple[str, routing.APIRoute, tp.List[params.Depends]]


def get_app_routes(app: FastAPI) -> tp.List[AppRoute]:
    """Получает все роуты из FastAPI приложения.

    Args:
        app: FastAPI приложение

    Returns:
        Список (полный путь, роут, зависимости), включая роуты подключенных
        роутеров и смонтированных приложений
    """
    return get_routes(app.router)


def get_routes(
    router: tp.Any,
    prefix: str = "",
    dependencies: tp.Optional[tp.List[params.Depends]] = None,
) -> tp.List[AppRoute]:
    """Рекурсивно получает все роуты из роутера.

    Обходит все роуты в роутере, подключенных роутерах и смонтированных
    подприложениях, добавляя к путям префикс, а к зависимостям зависимости
    подключения.

    Новые версии FastAPI не копируют роуты при include_router, а добавляют
    одну запись с исходным роутером и контекстом подключения (префикс и
    зависимости). Такие записи обходятся рекурсивно.

    Args:
        router: APIRouter или любой объект с атрибутом routes
        prefix: Префикс пути подключенного роутера или смонтированного приложения
        dependencies: Зависимости, унаследованные от подключения

    Returns:
        Список (полный путь, роут, зависимости)
    """
    inherited = list(dependencies or [])
    routes: tp.List[AppRoute] = []

    for route in getattr(router, "routes", []):
        if isinstance(route, routing.APIRoute):
            routes.append((prefix + route.path, route, [*inherited, *route.dependencies]))
        elif isinstance(route, Mount):
            # Рекурсивно обходим подприложения и подроутеры
            routes.extend(get_routes(route.app, prefix + route.path))
        elif _is_included_router(route):
            include_context = route.include_context
            routes.extend(
                get_routes(
                    route.original_router,
                    prefix + include_context.prefix,
                    [*inherited, *include_context.dependencies],
                )
            )

    return routes


def _is_included_router(route: tp.Any) -> bool:
    return isinstance(
        getattr(route, "original_router", None), routing.APIRouter
    ) and hasattr(route, "include_context")


def to_gateway_path(path: str) -> str:
    """Переводит конвертеры путей Starlette в шаблоны API Gateway.

    ``{file:path}`` становится ``{file+}``, остальные конвертеры отбрасываются.
    """

    def replace(match: re.Match) -> str:
        if match.group("converter") == "path":
            return "{%s+}" % match.group("name")
        return "{%s}" % match.group("name")

    return _PATH_CONVERTER_RE.sub(replace, path)


def _extract_endpoint_caching(
    dependencies: tp.List[params.Depends],
) -> tp.Optional[EndpointCaching]:
    # Ближайшее к роуту объявление перекрывает объявления подключения
    endpoint_caching = None
    for dependency in dependencies:
        if isinstance(dependency.dependency, EndpointCaching):
            endpoint_caching = dependency.dependency

    return endpoint_caching


def collect_additional_endpoints(app: FastAPI) -> tp.List[AdditionalEndpointDict]:
    """Собирает дополнительные эндпоинты из роутов с зависимостью EndpointCaching.

    Результат можно положить в custom.apiGatewayCaching.additionalEndpoints.

    Args:
        app: FastAPI приложение

    Returns:
        По одному эндпоинту на каждый метод каждого помеченного роута
    """
    endpoints: tp.List[AdditionalEndpointDict] = []
    for path, route, dependencies in get_app_routes(app):
        endpoint_caching = _extract_endpoint_caching(dependencies)
        if endpoint_caching is None:
            continue

        gateway_path = to_gateway_path(path)
        for method in sorted(route.methods or ()):
            endpoints.append(
                {
                    "method": method,
                    "path": gateway_path,
                    "caching": endpoint_caching.to_declaration(),
                }
            )
            logger.debug("Collected additional endpoint %s %s", method, gateway_path)

    return endpoints
