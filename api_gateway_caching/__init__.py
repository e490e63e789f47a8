"""api-gateway-caching - резолвер настроек кеширования API Gateway.

Подход:
- Чтение блока custom.apiGatewayCaching из описания деплоя
- Наследование настроек эндпоинтов от глобальных
- Стабильные имена ресурсов методов API Gateway
"""

from .config import DEFAULT_CACHING_DEFAULTS, CachingDefaults
from .depends import EndpointCaching
from .naming import derive_gateway_resource_name
from .resolver import SettingsResolver, resolve_settings
from .routes import collect_additional_endpoints
from .serializers import BaseSerializer, JSONSerializer
from .settings import (
    CacheKeyParameter,
    EndpointSettings,
    GlobalCachingSettings,
    PerKeyInvalidationSettings,
)
from .types import UnauthorizedStrategy

__version__ = "1.0.0"

__all__ = [
    # Резолвер
    "SettingsResolver",
    "resolve_settings",
    "derive_gateway_resource_name",
    # Конфигурация
    "CachingDefaults",
    "DEFAULT_CACHING_DEFAULTS",
    # Итоговые настройки
    "GlobalCachingSettings",
    "EndpointSettings",
    "PerKeyInvalidationSettings",
    "CacheKeyParameter",
    "UnauthorizedStrategy",
    # Интеграция с FastAPI
    "EndpointCaching",
    "collect_additional_endpoints",
    # Сериализация
    "BaseSerializer",
    "JSONSerializer",
]
