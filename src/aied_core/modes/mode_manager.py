"""Mode manager coordinating Normal/Insert/Visual/Command dispatch."""

from __future__ import annotations

from typing import Dict, Optional, Type

from aied_core.buffer import Buffer
from aied_core.commands import CommandEnvironment, CommandExecutor
from aied_core.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from aied_core.runtime import telemetry
from aied_core.settings import EditorSettings

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult, ModeType
from .command_mode import CommandMode
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .visual_mode import VisualMode


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self.exit_requested = False
        self.logger = telemetry.get_logger("aied_core.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="aied_core.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="aied_core.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def active_name(self) -> Optional[str]:
        return self._active

    @property
    def status_label(self) -> str:
        mode = self.active_mode
        return mode.status_label if mode else ""

    def mode(self, name: str) -> Mode:
        try:
            return self._modes[name]
        except KeyError:
            raise KeyError(f"Unknown mode '{name}'") from None

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous and previous.name == name:
            return
        if previous:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        self.context.bus.emit(
            "mode.switch",
            {"from": previous.name if previous else None, "to": name},
        )
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        return self._after_mode_result(result)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.exit_editor:
            self.exit_requested = True
            self.logger.info("exit requested")
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


def create_default_manager(
    buffer: Buffer | None = None,
    *,
    settings: EditorSettings | None = None,
    executor: CommandExecutor | None = None,
    environment: CommandEnvironment | None = None,
) -> ModeManager:
    """Wire a buffer, the default keymaps and all four modes together.

    Normal mode is registered first and therefore starts active.
    """

    if settings is None:
        settings = environment.settings if environment is not None else EditorSettings()
    if executor is None:
        executor = CommandExecutor(
            environment=environment or CommandEnvironment(settings=settings)
        )
    context = ModeContext(
        buffer=buffer if buffer is not None else Buffer(),
        bus=ModeBus(),
        settings=settings,
        commands=executor,
    )
    manager = ModeManager(context)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(VisualMode)
    manager.register_mode(CommandMode)
    manager.logger.debug(
        "default manager ready with modes %s",
        ", ".join(mode.value for mode in ModeType),
    )
    return manager


__all__ = ["ModeManager", "create_default_manager"]
