import logging
import typing as tp

from ._helpers import as_mapping, as_text, get_path, normalize_base_path, normalize_path
from .config import DEFAULT_CACHING_DEFAULTS, CachingDefaults
from .naming import derive_gateway_resource_name
from .schemas import (
    ApiGatewayCachingConfig,
    EndpointDeclaration,
    PerKeyInvalidationConfig,
    parse_functions,
)
from .settings import (
    CacheKeyParameter,
    EndpointSettings,
    GlobalCachingSettings,
    PerKeyInvalidationSettings,
)
from .types import CliOptions, DeploymentDescriptor, UnauthorizedStrategy

logger = logging.getLogger(__name__)

CACHING_SETTINGS_PATH = "custom.apiGatewayCaching"


class SettingsResolver:
    """Резолвер настроек кеширования API Gateway.

    Зона ответственности:
    1. Чтение блока custom.apiGatewayCaching и подстановка значений по умолчанию
    2. Выбор stage/region из опций командной строки или провайдера
    3. Разрешение настроек каждого http эндпоинта функций и дополнительных эндпоинтов
    4. Наследование TTL, шифрования и инвалидации по ключу от глобальных настроек

    Резолвер никогда не бросает исключений на некорректном описании деплоя:
    любое неверное или отсутствующее значение заменяется значением по умолчанию.

    Args:
        defaults: Значения по умолчанию (по умолчанию DEFAULT_CACHING_DEFAULTS)
    """

    def __init__(self, defaults: tp.Optional[CachingDefaults] = None) -> None:
        self.defaults = defaults or DEFAULT_CACHING_DEFAULTS

    def resolve(
        self,
        descriptor: DeploymentDescriptor,
        options: tp.Optional[CliOptions] = None,
    ) -> GlobalCachingSettings:
        """Строит итоговые настройки кеширования для описания деплоя.

        Args:
            descriptor: Описание деплоя (custom, provider, functions)
            options: Опции командной строки stage/region

        Returns:
            GlobalCachingSettings: Неизменяемый граф настроек.
        """
        raw_settings = as_mapping(get_path(descriptor, CACHING_SETTINGS_PATH))
        if raw_settings is None:
            logger.info("API Gateway caching is not configured")
            return GlobalCachingSettings()

        caching = ApiGatewayCachingConfig.model_validate(raw_settings)
        stage, region = self._resolve_target(descriptor, options)

        global_settings = GlobalCachingSettings(
            caching_enabled=caching.enabled,
            api_gateway_is_shared=caching.api_gateway_is_shared,
            rest_api_id=caching.rest_api_id,
            base_path=caching.base_path,
            stage=stage,
            region=region,
            cache_cluster_size=caching.cluster_size or self.defaults.cache_cluster_size,
            cache_ttl_in_seconds=self._non_negative_or(
                caching.ttl_in_seconds, self.defaults.cache_ttl_in_seconds
            ),
            data_encrypted=caching.data_encrypted or self.defaults.data_encrypted,
            per_key_invalidation=self.resolve_per_key_invalidation(
                caching.per_key_invalidation
            ),
        )

        endpoint_settings = []
        functions = parse_functions(get_path(descriptor, "functions"))
        for function_name, function in functions.items():
            for event in function.http_events:
                endpoint_settings.append(
                    self.resolve_endpoint(event, global_settings, function_name)
                )

        additional_endpoint_settings = [
            self.resolve_endpoint(endpoint, global_settings)
            for endpoint in caching.additional_endpoints
        ]

        logger.info(
            "Resolved caching settings for %d function endpoints and %d additional endpoints",
            len(endpoint_settings),
            len(additional_endpoint_settings),
        )
        return global_settings.model_copy(
            update={
                "endpoint_settings": tuple(endpoint_settings),
                "additional_endpoint_settings": tuple(additional_endpoint_settings),
            }
        )

    def resolve_endpoint(
        self,
        declaration: EndpointDeclaration,
        global_settings: GlobalCachingSettings,
        function_name: tp.Optional[str] = None,
    ) -> EndpointSettings:
        """Разрешает настройки одного эндпоинта относительно глобальных.

        Args:
            declaration: Объявление эндпоинта (метод, путь, блок caching)
            global_settings: Глобальные настройки без списков эндпоинтов
            function_name: Имя функции для эндпоинтов из событий функций

        Returns:
            EndpointSettings: Настройки эндпоинта.
        """
        method = declaration.method
        path = normalize_path(declaration.path)
        fields: dict[str, tp.Any] = {
            "function_name": function_name,
            "method": method,
            "path": path,
            "gateway_resource_name": derive_gateway_resource_name(path, method),
        }

        if global_settings.base_path:
            fields["path_without_global_base_path"] = path
            fields["path"] = normalize_base_path(global_settings.base_path) + path

        caching = declaration.caching
        if caching is None:
            fields["caching_enabled"] = False
        else:
            # Глобально выключенное кеширование нельзя включить на эндпоинте
            fields["caching_enabled"] = (
                bool(caching.enabled) if global_settings.caching_enabled else False
            )
            fields["data_encrypted"] = bool(
                caching.data_encrypted or global_settings.data_encrypted
            )
            fields["cache_ttl_in_seconds"] = self._non_negative_or(
                caching.ttl_in_seconds, global_settings.cache_ttl_in_seconds
            )
            if caching.cache_key_parameters is not None:
                fields["cache_key_parameters"] = tuple(
                    CacheKeyParameter(name=parameter.name)
                    for parameter in caching.cache_key_parameters
                )
            if caching.per_key_invalidation is None:
                fields["per_key_invalidation"] = global_settings.per_key_invalidation
            else:
                fields["per_key_invalidation"] = self.resolve_per_key_invalidation(
                    caching.per_key_invalidation
                )

        settings = EndpointSettings(**fields)
        logger.debug(
            "Endpoint %s %s -> %s, caching enabled: %s",
            settings.method,
            settings.path,
            settings.gateway_resource_name,
            settings.caching_enabled,
        )
        return settings

    def resolve_per_key_invalidation(
        self, declaration: tp.Optional[PerKeyInvalidationConfig]
    ) -> PerKeyInvalidationSettings:
        """Разрешает настройки инвалидации по ключу.

        Args:
            declaration: Объявленный блок perKeyInvalidation или None

        Returns:
            PerKeyInvalidationSettings: Без объявления - авторизация обязательна
            со стратегией по умолчанию.
        """
        if declaration is None:
            return PerKeyInvalidationSettings(
                require_authorization=True,
                handle_unauthorized_requests=self.defaults.unauthorized_strategy,
            )

        if declaration.require_authorization is False:
            return PerKeyInvalidationSettings(require_authorization=False)

        return PerKeyInvalidationSettings(
            require_authorization=True,
            handle_unauthorized_requests=self.map_unauthorized_strategy(
                declaration.handle_unauthorized_requests
            ),
        )

    def map_unauthorized_strategy(
        self, strategy: tp.Optional[str]
    ) -> UnauthorizedStrategy:
        if not strategy:
            return self.defaults.unauthorized_strategy

        resolved = UnauthorizedStrategy.lookup(strategy)
        if resolved is None:
            logger.warning(
                "Unknown strategy for unauthorized invalidation requests: %s, using %s",
                strategy,
                self.defaults.unauthorized_strategy.value,
            )
            return self.defaults.unauthorized_strategy
        return resolved

    @staticmethod
    def _resolve_target(
        descriptor: DeploymentDescriptor, options: tp.Optional[CliOptions]
    ) -> tp.Tuple[tp.Optional[str], tp.Optional[str]]:
        """Возвращает (stage, region): опции командной строки важнее провайдера."""
        options = as_mapping(options) or {}
        stage = as_text(options.get("stage")) or as_text(
            get_path(descriptor, "provider.stage")
        )
        region = as_text(options.get("region")) or as_text(
            get_path(descriptor, "provider.region")
        )
        return stage, region

    @staticmethod
    def _non_negative_or(value: tp.Optional[int], fallback: tp.Optional[int]) -> tp.Optional[int]:
        if value is not None and value >= 0:
            return value
        return fallback


def resolve_settings(
    descriptor: DeploymentDescriptor,
    options: tp.Optional[CliOptions] = None,
    defaults: tp.Optional[CachingDefaults] = None,
) -> GlobalCachingSettings:
    """Разрешает настройки кеширования описания деплоя.

    Args:
        descriptor: Описание деплоя
        options: Опции командной строки stage/region
        defaults: Значения по умолчанию

    Returns:
        GlobalCachingSettings: Итоговые настройки.
    """
    return SettingsResolver(defaults).resolve(descriptor, options)
