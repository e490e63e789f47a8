import typing as tp

import pytest
from fastapi import APIRouter, Depends, FastAPI

from api_gateway_caching import EndpointCaching, SettingsResolver

DescriptorFactory = tp.Callable[..., tp.Dict[str, tp.Any]]


def _http_function(*endpoints: tp.Any) -> tp.Dict[str, tp.Any]:
    """Функция с http событиями: (method, path[, caching]) или строка-шорткат."""
    events: tp.List[tp.Dict[str, tp.Any]] = []
    for endpoint in endpoints:
        if isinstance(endpoint, str):
            events.append({"http": endpoint})
            continue
        method, path, *rest = endpoint
        http: tp.Dict[str, tp.Any] = {"method": method, "path": path}
        if rest:
            http["caching"] = rest[0]
        events.append({"http": http})
    return {"handler": "handler.main", "events": events}


def _scheduled_function() -> tp.Dict[str, tp.Any]:
    return {"handler": "handler.main", "events": [{"schedule": "rate(1 hour)"}]}


@pytest.fixture
def http_function() -> tp.Callable[..., tp.Dict[str, tp.Any]]:
    return _http_function


@pytest.fixture
def scheduled_function() -> tp.Callable[[], tp.Dict[str, tp.Any]]:
    return _scheduled_function


@pytest.fixture
def make_descriptor() -> DescriptorFactory:
    """Создает фабрику описаний деплоя."""

    def factory(
        caching: tp.Optional[tp.Dict[str, tp.Any]] = None,
        functions: tp.Optional[tp.Dict[str, tp.Any]] = None,
        stage: str = "dev",
        region: str = "eu-west-1",
    ) -> tp.Dict[str, tp.Any]:
        descriptor: tp.Dict[str, tp.Any] = {
            "service": "cat-api",
            "provider": {"name": "aws", "stage": stage, "region": region},
            "custom": {},
            "functions": functions or {},
        }
        if caching is not None:
            descriptor["custom"]["apiGatewayCaching"] = caching
        return descriptor

    return factory


@pytest.fixture
def caching_config() -> tp.Dict[str, tp.Any]:
    """Создает включенный глобальный блок кеширования."""
    return {"enabled": True, "clusterSize": "0.5", "ttlInSeconds": 45}


@pytest.fixture
def resolver() -> SettingsResolver:
    """Создает экземпляр резолвера."""
    return SettingsResolver()


async def get_cat(cat_id: int) -> dict[str, int]:
    return {"cat_id": cat_id}


async def list_cats() -> list[dict[str, int]]:
    return []


async def get_file(file_path: str) -> dict[str, str]:
    return {"file_path": file_path}


@pytest.fixture
def app() -> FastAPI:
    app = FastAPI()

    app.router.add_api_route(
        "/cats",
        list_cats,
        methods=["GET"],
    )
    app.router.add_api_route(
        "/cats/{cat_id:int}",
        get_cat,
        dependencies=[
            Depends(
                EndpointCaching(
                    ttl_in_seconds=60,
                    cache_key_parameters=["request.path.cat_id"],
                )
            )
        ],
        methods=["GET", "HEAD"],
    )

    router = APIRouter(prefix="/files")
    router.add_api_route(
        "/{file_path:path}",
        get_file,
        dependencies=[Depends(EndpointCaching(data_encrypted=True))],
        methods=["GET"],
    )
    app.include_router(router)

    shelter_app = FastAPI()
    shelter_app.router.add_api_route(
        "/cats",
        list_cats,
        dependencies=[
            Depends(
                EndpointCaching(
                    enabled=False,
                    per_key_invalidation={"requireAuthorization": False},
                )
            )
        ],
        methods=["GET"],
    )
    app.mount("/shelter", app=shelter_app)

    return app
