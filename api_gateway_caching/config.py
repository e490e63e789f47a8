"""
Конфигурация значений по умолчанию для резолвера настроек кеширования.

Эти значения подставляются, когда описание деплоя их не задаёт.
"""
from pydantic import BaseModel, ConfigDict, Field

from .types import UnauthorizedStrategy


class CachingDefaults(BaseModel):
    """
    Значения по умолчанию для глобальных настроек кеширования.

    Attributes:
        cache_cluster_size: Размер кластера кеша API Gateway в гигабайтах
        cache_ttl_in_seconds: Время жизни кеша в секундах
        data_encrypted: Шифровать ли данные кеша
        unauthorized_strategy: Стратегия для неавторизованных запросов инвалидации
    """

    model_config = ConfigDict(frozen=True)

    cache_cluster_size: str = Field(
        default="0.5",
        description="Размер кластера кеша API Gateway",
    )
    cache_ttl_in_seconds: int = Field(
        default=3600,
        description="Время жизни кеша в секундах",
        ge=0,
    )
    data_encrypted: bool = Field(
        default=False,
        description="Шифрование данных кеша",
    )
    unauthorized_strategy: UnauthorizedStrategy = Field(
        default=UnauthorizedStrategy.IGNORE_WITH_WARNING,
        description="Стратегия обработки неавторизованных запросов инвалидации",
    )


DEFAULT_CACHING_DEFAULTS = CachingDefaults()
