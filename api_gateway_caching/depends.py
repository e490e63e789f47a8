import typing as tp

from .types import CacheKeyParameterDict, EndpointCachingDict, PerKeyInvalidationDict


class EndpointCaching:
    """Декларация кеширования API Gateway для маршрута FastAPI.

    Подключается как обычная зависимость и ничего не делает при запросе:
    ``dependencies=[Depends(EndpointCaching(ttl_in_seconds=60))]``.
    Маршруты с этой зависимостью собираются в дополнительные эндпоинты
    функцией routes.collect_additional_endpoints.

    Args:
        enabled: Включено ли кеширование эндпоинта
        ttl_in_seconds: Время жизни кеша, None - наследовать глобальное
        data_encrypted: Шифрование данных, None - наследовать глобальное
        cache_key_parameters: Имена параметров ключа кеша,
            например "request.path.cat_id"
        per_key_invalidation: Блок perKeyInvalidation, None - наследовать глобальный
    """

    def __init__(
        self,
        enabled: bool = True,
        ttl_in_seconds: tp.Optional[int] = None,
        data_encrypted: tp.Optional[bool] = None,
        cache_key_parameters: tp.Optional[tp.Sequence[str]] = None,
        per_key_invalidation: tp.Optional[PerKeyInvalidationDict] = None,
    ) -> None:
        self.enabled = enabled
        self.ttl_in_seconds = ttl_in_seconds
        self.data_encrypted = data_encrypted
        self.cache_key_parameters = (
            list(cache_key_parameters) if cache_key_parameters is not None else None
        )
        self.per_key_invalidation = per_key_invalidation

    def __call__(self) -> None:
        return None

    def to_declaration(self) -> EndpointCachingDict:
        """Возвращает блок caching в формате описания деплоя."""
        declaration: EndpointCachingDict = {"enabled": self.enabled}
        if self.ttl_in_seconds is not None:
            declaration["ttlInSeconds"] = self.ttl_in_seconds
        if self.data_encrypted is not None:
            declaration["dataEncrypted"] = self.data_encrypted
        if self.cache_key_parameters is not None:
            declaration["cacheKeyParameters"] = [
                CacheKeyParameterDict(name=name) for name in self.cache_key_parameters
            ]
        if self.per_key_invalidation is not None:
            declaration["perKeyInvalidation"] = self.per_key_invalidation
        return declaration
