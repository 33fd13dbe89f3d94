"""
@Author: li
@Email: lijianqiao2906@live.com
@FileName: dispatcher.py
@DateTime: 2026-03-06
@Docs: Strategy dispatcher keyed by template type.
按模板类型分发策略。
"""

from collections.abc import Callable
from typing import Any

from fastapi_template_import.config import ImportEngineConfig, resolve_config
from fastapi_template_import.exceptions import UnknownTemplateTypeError
from fastapi_template_import.schemas import Template, TemplateType
from fastapi_template_import.strategies import (
    ImportStrategy,
    MatrixImportStrategy,
    SimpleImportStrategy,
    VariationImportStrategy,
)
from fastapi_template_import.typing import ProductStore

type StrategyFactory = Callable[..., ImportStrategy[Any]]

DEFAULT_STRATEGIES: dict[str, StrategyFactory] = {
    TemplateType.SIMPLE: SimpleImportStrategy,
    TemplateType.VARIATION: VariationImportStrategy,
    TemplateType.MATRIX: MatrixImportStrategy,
}


class StrategyDispatcher:
    """Select the import strategy for a template type.

    根据模板类型选择导入策略。

    Examples:
        >>> from fastapi_template_import.stores import InMemoryProductStore
        >>> dispatcher = StrategyDispatcher(store=InMemoryProductStore())
        >>> type(dispatcher.get_strategy("matrix")).__name__
        'MatrixImportStrategy'
    """

    def __init__(
        self,
        *,
        store: ProductStore,
        config: ImportEngineConfig | None = None,
        strategies: dict[str, StrategyFactory] | None = None,
    ) -> None:
        self.store = store
        self.config = config or resolve_config()
        self._factories: dict[str, StrategyFactory] = dict(strategies or DEFAULT_STRATEGIES)

    def register(self, template_type: str, factory: StrategyFactory) -> None:
        """
        Register or override the strategy for a template type.
        注册或覆盖某模板类型的策略。
        """
        self._factories[str(template_type)] = factory

    @property
    def template_types(self) -> list[str]:
        return sorted(str(t) for t in self._factories)

    def get_strategy(self, template_type: str, *, template: Template | None = None) -> ImportStrategy[Any]:
        """
        Build the strategy registered for ``template_type``.
        构建 ``template_type`` 对应的策略。

        Raises:
            UnknownTemplateTypeError: When no strategy is registered; this aborts the run.
            UnknownTemplateTypeError: 未注册对应策略时抛出，并中止整次运行。
        """
        factory = self._factories.get(str(template_type))
        if factory is None:
            raise UnknownTemplateTypeError(
                message=f"Unknown template type: {template_type}",
                details={"template_type": str(template_type), "supported": self.template_types},
            )
        return factory(store=self.store, config=self.config, template=template)
