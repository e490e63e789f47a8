import math
import typing as tp
from collections.abc import Mapping, Sequence

_TRUTHY_TEXT = frozenset({"true", "yes", "on", "1"})
_FALSY_TEXT = frozenset({"false", "no", "off", "0", ""})


def get_path(data: tp.Any, dotted_path: str) -> tp.Any:
    """Достаёт значение по пути вида ``custom.apiGatewayCaching``.

    Возвращает None, если на любом шаге встретился не словарь или нет ключа.
    """
    current = data
    for part in dotted_path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def as_flag(value: tp.Any) -> bool | None:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        text = value.strip().lower()
        if text in _TRUTHY_TEXT:
            return True
        if text in _FALSY_TEXT:
            return False
    return None


def as_int(value: tp.Any) -> int | None:
    # bool является подклассом int, но TTL из True не бывает
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def as_text(value: tp.Any) -> str | None:
    if isinstance(value, str):
        return value
    # clusterSize в YAML часто приходит числом: 0.5
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def is_declared(value: tp.Any) -> bool:
    """Объявлено ли значение в описании деплоя.

    Пустыми считаются только None, False, пустая строка, ноль и NaN;
    пустые словари и списки объявлены.
    """
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not (isinstance(value, float) and math.isnan(value))
    return True


def as_mapping(value: tp.Any) -> Mapping[str, tp.Any] | None:
    return value if isinstance(value, Mapping) else None


def as_sequence(value: tp.Any) -> list[tp.Any]:
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        return list(value)
    return []


def normalize_path(path: str) -> str:
    """Убирает завершающий слэш, кроме корневого пути ``/``."""
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


def normalize_base_path(base_path: str) -> str:
    """Приводит базовый путь к виду ``/prefix`` без слэша в конце."""
    if not base_path.startswith("/"):
        base_path = "/" + base_path
    if base_path.endswith("/"):
        base_path = base_path[:-1]
    return base_path
