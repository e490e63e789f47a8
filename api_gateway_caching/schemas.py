"""Модели объявлений: то, что написано в описании деплоя, до подстановки значений по умолчанию.

Каждое поле терпимо к значениям неверного типа. Такие значения считаются
незаданными, поэтому разбор никогда не падает.
"""
import logging
import typing as tp
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ._helpers import as_flag, as_int, as_mapping, as_sequence, as_text, is_declared

logger = logging.getLogger(__name__)


class DeclarationModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class PerKeyInvalidationConfig(DeclarationModel):
    require_authorization: bool | None = Field(
        default=None,
        description="Требовать авторизацию для инвалидации по ключу. None - не задано.",
    )
    handle_unauthorized_requests: str | None = Field(
        default=None,
        description="Имя стратегии для неавторизованных запросов инвалидации.",
    )

    @field_validator("require_authorization", mode="before")
    @classmethod
    def coerce_flag(cls, value: tp.Any) -> tp.Any:
        return as_flag(value)

    @field_validator("handle_unauthorized_requests", mode="before")
    @classmethod
    def coerce_text(cls, value: tp.Any) -> tp.Any:
        return as_text(value)


class CacheKeyParameterConfig(DeclarationModel):
    name: str


class EndpointCachingConfig(DeclarationModel):
    enabled: bool | None = None
    ttl_in_seconds: int | None = Field(
        default=None,
        description="TTL эндпоинта. Отрицательные значения считаются незаданными.",
    )
    data_encrypted: bool | None = None
    cache_key_parameters: tuple[CacheKeyParameterConfig, ...] | None = None
    per_key_invalidation: PerKeyInvalidationConfig | None = None

    @field_validator("enabled", "data_encrypted", mode="before")
    @classmethod
    def coerce_flag(cls, value: tp.Any) -> tp.Any:
        return as_flag(value)

    @field_validator("ttl_in_seconds", mode="before")
    @classmethod
    def coerce_int(cls, value: tp.Any) -> tp.Any:
        return as_int(value)

    @field_validator("per_key_invalidation", mode="before")
    @classmethod
    def coerce_mapping(cls, value: tp.Any) -> tp.Any:
        return as_mapping(value)

    @field_validator("cache_key_parameters", mode="before")
    @classmethod
    def keep_named_parameters(cls, value: tp.Any) -> tp.Any:
        if not isinstance(value, (list, tuple)):
            return None
        parameters = []
        for item in as_sequence(value):
            if isinstance(item, Mapping) and isinstance(item.get("name"), str):
                parameters.append({"name": item["name"]})
            else:
                logger.debug("Skip malformed cache key parameter: %r", item)
        return parameters


class EndpointDeclaration(DeclarationModel):
    """HTTP эндпоинт из события функции или из additionalEndpoints."""

    method: str = ""
    path: str = "/"
    caching: EndpointCachingConfig | None = None

    @field_validator("method", mode="before")
    @classmethod
    def coerce_method(cls, value: tp.Any) -> tp.Any:
        return as_text(value) or ""

    @field_validator("path", mode="before")
    @classmethod
    def coerce_path(cls, value: tp.Any) -> tp.Any:
        return as_text(value) or "/"

    @field_validator("caching", mode="before")
    @classmethod
    def coerce_caching(cls, value: tp.Any) -> tp.Any:
        return as_mapping(value)


class AdditionalEndpointConfig(EndpointDeclaration):
    pass


class HttpEvent(EndpointDeclaration):
    kind: tp.Literal["http"] = "http"

    @classmethod
    def from_declaration(cls, declaration: tp.Any) -> "HttpEvent":
        """Создает событие из шортката ``"GET /cats"`` или из развернутой формы."""
        if isinstance(declaration, str):
            parts = declaration.split()
            method = parts[0] if parts else ""
            path = parts[1] if len(parts) > 1 else "/"
            return cls(method=method, path=path)
        fields = {
            key: value
            for key, value in (as_mapping(declaration) or {}).items()
            if key != "kind"
        }
        return cls.model_validate(fields)


class OtherEvent(DeclarationModel):
    kind: tp.Literal["other"] = "other"
    event_type: str | None = None


FunctionEvent = tp.Union[HttpEvent, OtherEvent]


def parse_event(raw: tp.Any) -> HttpEvent | OtherEvent:
    """Превращает сырое событие функции в помеченное событие.

    Событие считается HTTP эндпоинтом, если поле ``http`` объявлено в любой
    форме: шорткатом, словарем или даже пустым словарем.
    """
    event = as_mapping(raw) or {}
    if is_declared(event.get("http")):
        return HttpEvent.from_declaration(event["http"])
    event_type = next(iter(event), None)
    return OtherEvent(event_type=None if event_type is None else str(event_type))


class FunctionConfig(DeclarationModel):
    events: tuple[FunctionEvent, ...] = ()

    @field_validator("events", mode="before")
    @classmethod
    def tag_events(cls, value: tp.Any) -> tp.Any:
        return [parse_event(item) for item in as_sequence(value)]

    @property
    def http_events(self) -> list[HttpEvent]:
        return [event for event in self.events if isinstance(event, HttpEvent)]


class ApiGatewayCachingConfig(DeclarationModel):
    """Блок ``custom.apiGatewayCaching``."""

    enabled: bool | None = None
    api_gateway_is_shared: bool | None = None
    rest_api_id: str | None = None
    base_path: str | None = None
    cluster_size: str | None = None
    ttl_in_seconds: int | None = None
    data_encrypted: bool | None = None
    per_key_invalidation: PerKeyInvalidationConfig | None = None
    additional_endpoints: tuple[AdditionalEndpointConfig, ...] = ()

    @field_validator("enabled", "api_gateway_is_shared", "data_encrypted", mode="before")
    @classmethod
    def coerce_flag(cls, value: tp.Any) -> tp.Any:
        return as_flag(value)

    @field_validator("rest_api_id", "base_path", "cluster_size", mode="before")
    @classmethod
    def coerce_text(cls, value: tp.Any) -> tp.Any:
        return as_text(value)

    @field_validator("ttl_in_seconds", mode="before")
    @classmethod
    def coerce_int(cls, value: tp.Any) -> tp.Any:
        return as_int(value)

    @field_validator("per_key_invalidation", mode="before")
    @classmethod
    def coerce_mapping(cls, value: tp.Any) -> tp.Any:
        return as_mapping(value)

    @field_validator("additional_endpoints", mode="before")
    @classmethod
    def keep_mappings(cls, value: tp.Any) -> tp.Any:
        endpoints = []
        for item in as_sequence(value):
            if isinstance(item, Mapping):
                endpoints.append(item)
            else:
                logger.debug("Skip malformed additional endpoint: %r", item)
        return endpoints


def parse_functions(raw: tp.Any) -> dict[str, FunctionConfig]:
    """Разбирает ``functions`` в порядке объявления; не словари дают функции без событий."""
    functions = {}
    for name, declaration in (as_mapping(raw) or {}).items():
        functions[str(name)] = FunctionConfig.model_validate(as_mapping(declaration) or {})
    return functions
