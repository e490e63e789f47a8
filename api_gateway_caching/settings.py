"""
Итоговые настройки кеширования API Gateway.

Модели неизменяемы: граф строится резолвером за один проход и дальше
только читается генератором шаблонов инфраструктуры.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .types import UnauthorizedStrategy


class ResolvedModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PerKeyInvalidationSettings(ResolvedModel):
    """
    Настройки инвалидации кеша по ключу.

    Attributes:
        require_authorization: Требуется ли авторизация для инвалидации
        handle_unauthorized_requests: Стратегия для неавторизованных запросов,
            задана только при require_authorization=True
    """

    require_authorization: bool = True
    handle_unauthorized_requests: Optional[UnauthorizedStrategy] = None

    @model_validator(mode="after")
    def strategy_requires_authorization(self) -> "PerKeyInvalidationSettings":
        if not self.require_authorization and self.handle_unauthorized_requests:
            raise ValueError(
                "handle_unauthorized_requests must be unset when authorization is not required."
            )
        return self


class CacheKeyParameter(ResolvedModel):
    name: str


class EndpointSettings(ResolvedModel):
    """
    Настройки кеширования одного эндпоинта (метод + путь).

    Attributes:
        function_name: Имя функции, если эндпоинт объявлен событием функции
        method: HTTP метод в том виде, в каком он объявлен
        path: Нормализованный путь с глобальным базовым путём
        path_without_global_base_path: Путь до добавления базового пути
        gateway_resource_name: Имя ресурса метода API Gateway
        caching_enabled: Включено ли кеширование для эндпоинта
        data_encrypted: Шифрование данных кеша
        cache_ttl_in_seconds: Время жизни кеша в секундах
        cache_key_parameters: Параметры, входящие в ключ кеша
        per_key_invalidation: Настройки инвалидации по ключу
    """

    function_name: Optional[str] = None
    method: str
    path: str
    path_without_global_base_path: Optional[str] = None
    gateway_resource_name: str
    caching_enabled: bool = False
    data_encrypted: Optional[bool] = None
    cache_ttl_in_seconds: Optional[int] = None
    cache_key_parameters: Optional[Tuple[CacheKeyParameter, ...]] = None
    per_key_invalidation: Optional[PerKeyInvalidationSettings] = None


class GlobalCachingSettings(ResolvedModel):
    """
    Глобальные настройки кеширования деплоя.

    Если блок custom.apiGatewayCaching не задан, все поля кроме двух
    последовательностей эндпоинтов остаются None.
    """

    caching_enabled: Optional[bool] = None
    api_gateway_is_shared: Optional[bool] = None
    rest_api_id: Optional[str] = None
    base_path: Optional[str] = None
    stage: Optional[str] = None
    region: Optional[str] = None
    cache_cluster_size: Optional[str] = None
    cache_ttl_in_seconds: Optional[int] = None
    data_encrypted: Optional[bool] = None
    per_key_invalidation: Optional[PerKeyInvalidationSettings] = None
    endpoint_settings: Tuple[EndpointSettings, ...] = Field(
        default=(),
        description="Эндпоинты из http событий функций в порядке объявления.",
    )
    additional_endpoint_settings: Tuple[EndpointSettings, ...] = Field(
        default=(),
        description="Явно перечисленные дополнительные эндпоинты в порядке объявления.",
    )

    @property
    def is_configured(self) -> bool:
        return self.per_key_invalidation is not None

    @property
    def all_endpoint_settings(self) -> Tuple[EndpointSettings, ...]:
        return self.endpoint_settings + self.additional_endpoint_settings
