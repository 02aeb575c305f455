"""Environment-driven engine settings."""

from __future__ import annotations

from dataclasses import dataclass

from line_input.buffer.state import EditMode

from .telemetry import env, env_flag


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Knobs a host may tweak without touching the keymap directly."""

    start_mode: EditMode = EditMode.INSERT
    tab_inserts: bool = True
    blur_keys_enabled: bool = True
    logger_name: str = "line_input.dispatch"

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from ``LINE_INPUT_*`` variables, falling back to defaults."""

        defaults = cls()
        raw_mode = env("START_MODE")
        start_mode = defaults.start_mode
        if raw_mode:
            try:
                start_mode = EditMode(raw_mode.strip().lower())
            except ValueError as exc:
                raise ValueError(
                    "LINE_INPUT_START_MODE must be 'insert' or 'overwrite', "
                    f"got {raw_mode!r}"
                ) from exc

        return cls(
            start_mode=start_mode,
            tab_inserts=env_flag("TAB_INSERTS", defaults.tab_inserts),
            blur_keys_enabled=env_flag("BLUR_KEYS", defaults.blur_keys_enabled),
            logger_name=env("DISPATCH_LOGGER") or defaults.logger_name,
        )


__all__ = ["EngineConfig"]
