import json
import typing as tp

from .settings import GlobalCachingSettings


class BaseSerializer:
    def dumps(self, settings: GlobalCachingSettings) -> tp.Union[str, bytes]:
        raise NotImplementedError()

    def loads(self, data: tp.Union[str, bytes]) -> GlobalCachingSettings:
        raise NotImplementedError()

    @property
    def is_binary(self) -> bool:
        raise NotImplementedError()


class JSONSerializer(BaseSerializer):
    """Сериализует итоговые настройки в camelCase JSON для генерации шаблонов.

    Args:
        indent: Отступ для форматированного вывода, None для компактного
    """

    def __init__(self, indent: tp.Optional[int] = None) -> None:
        self._indent = indent

    def dumps(self, settings: GlobalCachingSettings) -> str:
        # Неопределённые поля не выводятся, как и в исходном описании деплоя
        payload = settings.model_dump(mode="json", by_alias=True, exclude_none=True)
        return json.dumps(payload, indent=self._indent)

    def loads(self, data: tp.Union[str, bytes]) -> GlobalCachingSettings:
        if isinstance(data, bytes):
            data = data.decode()

        return GlobalCachingSettings.model_validate(json.loads(data))

    @property
    def is_binary(self) -> bool:
        return False
