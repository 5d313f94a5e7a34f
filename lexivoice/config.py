"""Configuration model and loaders for Lexivoice.

Responsibilities:
- Define runtime configuration as a typed dataclass passed to the pipeline.
- Provide loader entry points for file- and environment-based configuration.

Key types:
- `LexivoiceConfig`: normalized runtime settings for a pipeline run.
- `ConfigLoader`: static construction helpers for `LexivoiceConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .parsing import (
    normalize_optional_string,
    parse_non_negative_int,
    parse_permissive_boolean,
)


_DEFAULT_VOICE_NAME = "kevin16"
_DEFAULT_PAUSE_MS = 300
_DEFAULT_SPACY_MODEL = "en_core_web_sm"
_DEFAULT_AUDIO_FILENAME = "TextToSpeechAudioRecording.wav"


@dataclass(slots=True)
class LexivoiceConfig:
    """Runtime configuration for one pipeline run.

    Attributes:
        input_path: Source text file location.
        output_dir: Directory receiving per-sentence artifacts and the audio file.
        voice_name: Synthesis voice identifier looked up in the voice registry.
        pause_ms: Pause between narrated sentences, in milliseconds.
        spacy_model: spaCy pipeline package used by the annotation gateway.
        audio_filename: WAV file name written inside `output_dir`.
        encoding: Source text encoding.
        narrate: Whether the narration stage runs at all.
    """

    input_path: Path
    output_dir: Path = field(default_factory=lambda: Path("."))
    voice_name: str = _DEFAULT_VOICE_NAME
    pause_ms: int = _DEFAULT_PAUSE_MS
    spacy_model: str = _DEFAULT_SPACY_MODEL
    audio_filename: str = _DEFAULT_AUDIO_FILENAME
    encoding: str = "utf-8"
    narrate: bool = True

    @property
    def audio_path(self) -> Path:
        return self.output_dir / self.audio_filename

    @property
    def pause_seconds(self) -> float:
        return self.pause_ms / 1000.0

    def validate(self) -> None:
        """Validate runtime configuration values before pipeline execution."""

        self._require_non_empty(self.voice_name, "voice_name")
        self._require_non_empty(self.spacy_model, "spacy_model")
        self._require_non_empty(self.audio_filename, "audio_filename")
        self._require_non_empty(self.encoding, "encoding")
        if isinstance(self.pause_ms, bool) or not isinstance(self.pause_ms, int):
            raise ValueError("`pause_ms` must be a non-negative integer.")
        if self.pause_ms < 0:
            raise ValueError("`pause_ms` must be a non-negative integer.")
        if not self.audio_filename.lower().endswith(".wav"):
            raise ValueError("`audio_filename` must name a `.wav` file.")

    @staticmethod
    def _require_non_empty(value: str, field_name: str) -> None:
        """Validate that string fields are not empty."""

        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"`{field_name}` must be a non-empty string.")


class ConfigLoader:
    """Factory methods for creating `LexivoiceConfig` from external sources."""

    _REQUIRED_YAML_KEYS = frozenset({"input_path"})
    _SUPPORTED_YAML_KEYS = frozenset(
        {
            "input_path",
            "output_dir",
            "voice_name",
            "pause_ms",
            "spacy_model",
            "audio_filename",
            "encoding",
            "narrate",
        }
    )

    @staticmethod
    def from_yaml(path: Path) -> LexivoiceConfig:
        """Create a validated config from a YAML file."""

        path_text = path.read_text(encoding="utf-8")
        payload = ConfigLoader._parse_yaml_payload(path_text, path)

        return ConfigLoader._build_config_from_mapping(payload, source_label=f"YAML `{path}`")

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> LexivoiceConfig:
        """Create a validated config from `LEXIVOICE_*` environment variables."""

        env_map: Mapping[str, str] = os.environ if env is None else env

        input_value = ConfigLoader._optional_env_string(env_map, "LEXIVOICE_INPUT_PATH")
        if input_value is None:
            raise ValueError("Environment variable `LEXIVOICE_INPUT_PATH` is required.")
        output_value = ConfigLoader._optional_env_string(env_map, "LEXIVOICE_OUTPUT_DIR")

        pause_ms = _DEFAULT_PAUSE_MS
        raw_pause = ConfigLoader._optional_env_string(env_map, "LEXIVOICE_PAUSE_MS")
        if raw_pause is not None:
            parsed_pause = parse_non_negative_int(raw_pause)
            if parsed_pause is None:
                raise ValueError(
                    "Environment variable `LEXIVOICE_PAUSE_MS` must be a non-negative integer."
                )
            pause_ms = parsed_pause

        narrate = True
        if "LEXIVOICE_NARRATE" in env_map:
            parsed_narrate = parse_permissive_boolean(env_map.get("LEXIVOICE_NARRATE"))
            if parsed_narrate is None:
                raise ValueError(
                    "Environment variable `LEXIVOICE_NARRATE` must be a boolean value "
                    "(`true`/`false`, `1`/`0`, `yes`/`no`)."
                )
            narrate = parsed_narrate

        config = LexivoiceConfig(
            input_path=Path(input_value),
            output_dir=Path(output_value) if output_value is not None else Path("."),
            voice_name=(
                ConfigLoader._optional_env_string(env_map, "LEXIVOICE_VOICE_NAME")
                or _DEFAULT_VOICE_NAME
            ),
            pause_ms=pause_ms,
            spacy_model=(
                ConfigLoader._optional_env_string(env_map, "LEXIVOICE_SPACY_MODEL")
                or _DEFAULT_SPACY_MODEL
            ),
            audio_filename=(
                ConfigLoader._optional_env_string(env_map, "LEXIVOICE_AUDIO_FILENAME")
                or _DEFAULT_AUDIO_FILENAME
            ),
            encoding=ConfigLoader._optional_env_string(env_map, "LEXIVOICE_ENCODING") or "utf-8",
            narrate=narrate,
        )
        config.validate()
        return config

    @staticmethod
    def _parse_yaml_payload(raw_text: str, path: Path) -> Mapping[str, Any]:
        """Parse YAML text and enforce a mapping root payload."""

        try:
            payload = yaml.safe_load(raw_text)
        except yaml.YAMLError as exc:
            raise ValueError(f"YAML config `{path}` is not valid YAML: {exc}") from exc

        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise ValueError(f"YAML config `{path}` must contain a top-level mapping/object.")
        return payload

    @staticmethod
    def _build_config_from_mapping(
        payload: Mapping[str, Any], source_label: str
    ) -> LexivoiceConfig:
        """Build a validated config from a normalized mapping payload."""

        ConfigLoader._validate_yaml_keys(payload, source_label)

        input_value = ConfigLoader._optional_non_empty_string(payload, "input_path")
        if input_value is None:
            raise ValueError(f"{source_label} requires non-empty `input_path`.")
        output_value = ConfigLoader._optional_non_empty_string(payload, "output_dir")

        config = LexivoiceConfig(
            input_path=Path(input_value),
            output_dir=Path(output_value) if output_value is not None else Path("."),
            voice_name=(
                ConfigLoader._optional_non_empty_string(payload, "voice_name")
                or _DEFAULT_VOICE_NAME
            ),
            pause_ms=ConfigLoader._optional_non_negative_int(
                payload, "pause_ms", source_label, default=_DEFAULT_PAUSE_MS
            ),
            spacy_model=(
                ConfigLoader._optional_non_empty_string(payload, "spacy_model")
                or _DEFAULT_SPACY_MODEL
            ),
            audio_filename=(
                ConfigLoader._optional_non_empty_string(payload, "audio_filename")
                or _DEFAULT_AUDIO_FILENAME
            ),
            encoding=ConfigLoader._optional_non_empty_string(payload, "encoding") or "utf-8",
            narrate=ConfigLoader._optional_boolean(
                payload, "narrate", source_label, default=True
            ),
        )
        config.validate()
        return config

    @staticmethod
    def _validate_yaml_keys(payload: Mapping[str, Any], source_label: str) -> None:
        """Validate supported and required YAML keys."""

        unknown = sorted(set(payload).difference(ConfigLoader._SUPPORTED_YAML_KEYS))
        if unknown:
            key_list = ", ".join(unknown)
            raise ValueError(f"{source_label} includes unsupported key(s): {key_list}.")

        missing = sorted(
            key for key in ConfigLoader._REQUIRED_YAML_KEYS if key not in payload
        )
        if missing:
            key_list = ", ".join(missing)
            raise ValueError(f"{source_label} is missing required key(s): {key_list}.")

    @staticmethod
    def _optional_non_empty_string(payload: Mapping[str, Any], key: str) -> str | None:
        """Read an optional string field and normalize blank values to `None`."""

        if key not in payload:
            return None
        return normalize_optional_string(payload[key])

    @staticmethod
    def _optional_non_negative_int(
        payload: Mapping[str, Any], key: str, source_label: str, default: int
    ) -> int:
        """Read and validate a non-negative integer payload field."""

        if key not in payload or normalize_optional_string(payload[key]) is None:
            return default
        parsed = parse_non_negative_int(payload[key])
        if parsed is None:
            raise ValueError(f"{source_label} field `{key}` must be a non-negative integer.")
        return parsed

    @staticmethod
    def _optional_boolean(
        payload: Mapping[str, Any], key: str, source_label: str, default: bool
    ) -> bool:
        """Read and validate a boolean field from a payload."""

        if key not in payload:
            return default

        parsed = parse_permissive_boolean(payload[key])
        if parsed is None:
            raise ValueError(
                f"{source_label} field `{key}` must be a boolean value "
                "(`true`/`false`, `1`/`0`, `yes`/`no`)."
            )
        return parsed

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))
