"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import TYPE_CHECKING, List

from aied_core.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

if TYPE_CHECKING:
    from aied_core.keymaps.resolver import KeymapResolver, ResolutionMatch


def key_to_token(key: KeyInput) -> str:
    return key.token


def require_keymap_resolver(context: ModeContext) -> "KeymapResolver":
    from aied_core.keymaps.resolver import KeymapResolver

    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


class KeymapMode(Mode):
    """Mode that resolves accumulated key tokens against its keymap.

    Subclasses override :meth:`handle_unbound` for keys no binding claims.
    """

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"aied_core.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._pending: List[str] = []

    @property
    def pending_keys(self) -> str:
        return "".join(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(self.name, tuple(self._pending))

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(handled=True, status="pending", message="awaiting_sequence")

        had_prefix = len(self._pending) > 1
        self._pending.clear()
        if had_prefix:
            self.logger.debug("dropped unknown sequence ending in %s", key.token)
            return ModeResult(handled=True, status="miss", message="unknown_sequence")
        return self.handle_unbound(key)

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(handled=False, status="miss")

    def _execute_match(self, match: "ResolutionMatch") -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(handled=True)


__all__ = [
    "KeymapMode",
    "key_to_token",
    "require_keymap_resolver",
]
