import logging
from typing import Any, MutableMapping


class OperationLogger(logging.LoggerAdapter):
    """
    Logger bound to key-value context, e.g. ``op="domain.pizzaland.Save"``.

    Unlike the stock adapter, per-call ``extra`` is merged with the bound
    context instead of replacing it.
    """

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs

    def bind(self, **context: Any) -> "OperationLogger":
        return OperationLogger(self.logger, {**(self.extra or {}), **context})


def get_operation_logger(name: str, **context: Any) -> OperationLogger:
    return OperationLogger(logging.getLogger(name), context)
