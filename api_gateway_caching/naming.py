from .types import HTTPMethod, PathTemplate

RESOURCE_NAME_PREFIX = "ApiGatewayMethod"

_REMOVED_CHARACTERS = ("+", "_", ".")


def _clean(text: str) -> str:
    for character in _REMOVED_CHARACTERS:
        text = text.replace(character, "")
    return text.replace("-", "Dash")


def _segment_name(segment: str) -> str:
    if segment.startswith("{") and segment.endswith("}"):
        # Имя параметра пути сохраняет регистр: {pawId} -> PawIdVar
        name = _clean(segment[1:-1]) + "Var"
    else:
        name = _clean(segment.lower())
    return name[:1].upper() + name[1:]


def derive_gateway_resource_name(path: PathTemplate, method: HTTPMethod) -> str:
    """Генерирует стабильное имя ресурса метода API Gateway.

    Args:
        path: Путь эндпоинта, например "/cat/{pawId}"
        method: HTTP метод, например "get"

    Returns:
        str: Имя вида "ApiGatewayMethodCatPawIdVarGet".

    Note:
        Функция детерминирована и определена для любых входных строк.
        Коллизии между разными парами (path, method) не проверяются.
    """
    segments = path.split("/")
    segments.append(method.lower())
    return RESOURCE_NAME_PREFIX + "".join(_segment_name(s) for s in segments)
