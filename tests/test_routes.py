"""Тесты для сбора дополнительных эндпоинтов из FastAPI приложения."""

import pytest
from fastapi import APIRouter, Depends, FastAPI

from api_gateway_caching import EndpointCaching, UnauthorizedStrategy, resolve_settings
from api_gateway_caching.routes import (
    collect_additional_endpoints,
    get_app_routes,
    to_gateway_path,
)


def test_get_app_routes_includes_mounted_apps(app: FastAPI) -> None:
    paths = [path for path, _, _ in get_app_routes(app)]

    assert "/cats" in paths
    assert "/cats/{cat_id:int}" in paths
    assert "/files/{file_path:path}" in paths
    assert "/shelter/cats" in paths


@pytest.mark.parametrize(
    "path, expected_path",
    [
        ("/cats", "/cats"),
        ("/cats/{cat_id}", "/cats/{cat_id}"),
        ("/cats/{cat_id:int}", "/cats/{cat_id}"),
        ("/files/{file_path:path}", "/files/{file_path+}"),
        ("/a/{x:str}/b/{y:uuid}", "/a/{x}/b/{y}"),
    ],
)
def test_to_gateway_path(path: str, expected_path: str) -> None:
    assert to_gateway_path(path) == expected_path


def test_collect_additional_endpoints(app: FastAPI) -> None:
    endpoints = collect_additional_endpoints(app)

    assert endpoints == [
        {
            "method": "GET",
            "path": "/cats/{cat_id}",
            "caching": {
                "enabled": True,
                "ttlInSeconds": 60,
                "cacheKeyParameters": [{"name": "request.path.cat_id"}],
            },
        },
        {
            "method": "HEAD",
            "path": "/cats/{cat_id}",
            "caching": {
                "enabled": True,
                "ttlInSeconds": 60,
                "cacheKeyParameters": [{"name": "request.path.cat_id"}],
            },
        },
        {
            "method": "GET",
            "path": "/files/{file_path+}",
            "caching": {"enabled": True, "dataEncrypted": True},
        },
        {
            "method": "GET",
            "path": "/shelter/cats",
            "caching": {
                "enabled": False,
                "perKeyInvalidation": {"requireAuthorization": False},
            },
        },
    ]


def test_collected_endpoints_resolve(app: FastAPI) -> None:
    descriptor = {
        "provider": {"stage": "dev", "region": "eu-west-1"},
        "custom": {
            "apiGatewayCaching": {
                "enabled": True,
                "ttlInSeconds": 300,
                "additionalEndpoints": collect_additional_endpoints(app),
            }
        },
    }

    settings = resolve_settings(descriptor)

    get_cat, head_cat, get_file, shelter = settings.additional_endpoint_settings
    assert get_cat.gateway_resource_name == "ApiGatewayMethodCatsCatidVarGet"
    assert get_cat.caching_enabled is True
    assert get_cat.cache_ttl_in_seconds == 60
    assert head_cat.method == "HEAD"
    assert get_file.gateway_resource_name == "ApiGatewayMethodFilesFilepathVarGet"
    assert get_file.data_encrypted is True
    assert get_file.cache_ttl_in_seconds == 300
    assert shelter.caching_enabled is False
    assert shelter.per_key_invalidation.require_authorization is False
    assert get_cat.per_key_invalidation.handle_unauthorized_requests == (
        UnauthorizedStrategy.IGNORE_WITH_WARNING
    )


async def list_kittens() -> list[dict[str, int]]:
    return []


def test_included_routers_keep_prefix_and_dependencies() -> None:
    kittens = APIRouter(prefix="/kittens")
    kittens.add_api_route("/{kitten_id}", list_kittens, methods=["GET"])
    kittens.add_api_route(
        "/",
        list_kittens,
        dependencies=[Depends(EndpointCaching(ttl_in_seconds=5))],
        methods=["GET"],
    )

    shelter = APIRouter()
    shelter.include_router(
        kittens,
        prefix="/shelter",
        dependencies=[Depends(EndpointCaching(ttl_in_seconds=30))],
    )

    app = FastAPI()
    app.include_router(shelter, prefix="/v1")

    paths = [path for path, _, _ in get_app_routes(app)]
    assert paths == ["/v1/shelter/kittens/{kitten_id}", "/v1/shelter/kittens/"]

    endpoints = collect_additional_endpoints(app)

    assert endpoints == [
        {
            "method": "GET",
            "path": "/v1/shelter/kittens/{kitten_id}",
            "caching": {"enabled": True, "ttlInSeconds": 30},
        },
        {
            "method": "GET",
            "path": "/v1/shelter/kittens/",
            "caching": {"enabled": True, "ttlInSeconds": 5},
        },
    ]


def test_routes_without_endpoint_caching_are_skipped() -> None:
    router = APIRouter(prefix="/kittens")
    router.add_api_route("/", list_kittens, methods=["GET"])

    app = FastAPI()
    app.include_router(router)

    assert collect_additional_endpoints(app) == []


def test_endpoint_caching_declaration() -> None:
    caching = EndpointCaching()

    assert caching.to_declaration() == {"enabled": True}
    assert caching() is None
