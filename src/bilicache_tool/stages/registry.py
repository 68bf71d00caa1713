"""Stage registry and plugin module loading helpers."""

from __future__ import annotations

import importlib
import importlib.util
from collections.abc import Iterable
from pathlib import Path
from types import ModuleType

from bilicache_tool.application.ports import ProcessingStage
from bilicache_tool.errors import StageRegistryError
from bilicache_tool.stages.builtins import BUILTIN_STAGES


class StageRegistry:
    """Registry for processing stages."""

    def __init__(self) -> None:
        self._stages: dict[str, ProcessingStage] = {}

    def register(self, stage: ProcessingStage) -> None:
        """Register stage instance by unique name.

        Parameters
        ----------
        stage : ProcessingStage
            Stage instance to register.

        Raises
        ------
        StageRegistryError
            If the stage has no name, no ``process`` method, or the name is
            already taken.
        """
        name = (getattr(stage, "name", "") or "").strip()
        if not name:
            raise StageRegistryError("Stage must define a non-empty 'name'.")
        if not callable(getattr(stage, "process", None)):
            raise StageRegistryError(f"Stage '{name}' must define process(context, options).")
        if name in self._stages:
            raise StageRegistryError(f"Stage '{name}' is already registered.")
        self._stages[name] = stage

    def names(self) -> list[str]:
        """Return registered stage names.

        Returns
        -------
        list[str]
            Sorted list of stage names.
        """
        return sorted(self._stages.keys())

    def get(self, name: str) -> ProcessingStage:
        """Get stage by name.

        Raises
        ------
        StageRegistryError
            If the stage name is not registered.
        """
        try:
            return self._stages[name]
        except KeyError as exc:
            raise StageRegistryError(
                f"Unknown stage '{name}'. Available stages: {', '.join(self.names())}"
            ) from exc

    def load_module(self, module_or_path: str) -> None:
        """Load stages from module name or file path.

        .. warning::
            This method executes code from the specified module. Only load
            stage modules from trusted sources.
        """
        module = _import_module_or_path(module_or_path)
        _register_from_module(module, self)


def _import_module_or_path(module_or_path: str) -> ModuleType:
    """Import module by import path or filesystem path.

    Parameters
    ----------
    module_or_path : str
        Python module path or local file path. Must be from a trusted source.

    Returns
    -------
    ModuleType
        Imported module object.

    Raises
    ------
    StageRegistryError
        If import cannot be completed.
    """
    candidate = Path(module_or_path)
    if candidate.exists():
        spec = importlib.util.spec_from_file_location(candidate.stem, candidate)
        if spec is None or spec.loader is None:
            raise StageRegistryError(f"Unable to load stage module from {candidate}.")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise StageRegistryError(
                f"Unable to execute stage module {candidate}: {exc}"
            ) from exc
        return module

    try:
        return importlib.import_module(module_or_path)
    except Exception as exc:
        raise StageRegistryError(
            f"Unable to import stage module '{module_or_path}': {exc}"
        ) from exc


def _register_from_module(module: ModuleType, registry: StageRegistry) -> None:
    """Register stage definitions found in module."""
    if hasattr(module, "register_stages"):
        module.register_stages(registry)
        return

    stages_obj = getattr(module, "STAGES", None)
    if stages_obj is not None:
        for stage in stages_obj:
            registry.register(stage)
        return

    stage_obj = getattr(module, "STAGE", None)
    if stage_obj is not None:
        registry.register(stage_obj)
        return

    raise StageRegistryError(
        "Stage module must expose register_stages(registry), STAGES, or STAGE."
    )


def create_default_registry(
    extra_modules: Iterable[str] | None = None,
) -> StageRegistry:
    """Create a registry holding the built-in stages plus any extra modules.

    Parameters
    ----------
    extra_modules : Iterable[str] | None, optional
        Additional stage modules to load.

    Returns
    -------
    StageRegistry
        Registry with built-in and external stages.
    """
    registry = StageRegistry()
    for stage_cls in BUILTIN_STAGES:
        registry.register(stage_cls())
    for module in extra_modules or []:
        registry.load_module(module)
    return registry
