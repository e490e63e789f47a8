"""
Типы для описания настроек кеширования API Gateway.

Этот модуль определяет перечисление стратегий обработки неавторизованных
запросов инвалидации и структуры входного описания деплоя.
"""
from enum import Enum
from typing import Any, Dict, List, Union

from typing_extensions import NotRequired, TypeAlias, TypedDict


class UnauthorizedStrategy(str, Enum):
    """Стратегия обработки неавторизованного запроса инвалидации по ключу."""

    IGNORE = "Ignore"
    IGNORE_WITH_WARNING = "IgnoreWithWarning"
    FAIL = "Fail"

    @classmethod
    def lookup(cls, value: str) -> "UnauthorizedStrategy | None":
        """
        Найти стратегию по имени без учёта регистра.

        Args:
            value: Имя стратегии, например "ignoreWithWarning"

        Returns:
            Стратегия или None, если имя не распознано
        """
        text = value.strip().lower()
        for strategy in cls:
            if strategy.value.lower() == text:
                return strategy
        return None


class CacheKeyParameterDict(TypedDict):
    name: str


class PerKeyInvalidationDict(TypedDict, total=False):
    requireAuthorization: bool
    handleUnauthorizedRequests: str


class EndpointCachingDict(TypedDict, total=False):
    enabled: bool
    ttlInSeconds: int
    dataEncrypted: bool
    cacheKeyParameters: List[CacheKeyParameterDict]
    perKeyInvalidation: PerKeyInvalidationDict


class HttpEventDict(TypedDict, total=False):
    method: str
    path: str
    caching: EndpointCachingDict


class AdditionalEndpointDict(TypedDict):
    method: str
    path: str
    caching: NotRequired[EndpointCachingDict]


class ApiGatewayCachingDict(TypedDict, total=False):
    enabled: bool
    apiGatewayIsShared: bool
    restApiId: str
    basePath: str
    clusterSize: str
    ttlInSeconds: int
    dataEncrypted: bool
    perKeyInvalidation: PerKeyInvalidationDict
    additionalEndpoints: List[AdditionalEndpointDict]


class CliOptions(TypedDict, total=False):
    stage: str
    region: str


# Описание деплоя - вложенный документ произвольной формы, из которого
# читаются только custom.apiGatewayCaching, provider и functions
DeploymentDescriptor: TypeAlias = Dict[str, Any]
HttpEventDeclaration: TypeAlias = Union[str, HttpEventDict]
HTTPMethod: TypeAlias = str
PathTemplate: TypeAlias = str
